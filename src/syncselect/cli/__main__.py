from syncselect.cli.main import main

main()
