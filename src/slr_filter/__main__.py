from slr_filter.cli.main import main

main()
