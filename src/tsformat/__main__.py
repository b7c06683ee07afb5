from tsformat.cli.main import main

main()
