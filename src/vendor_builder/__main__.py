from vendor_builder.cli import main

main()
