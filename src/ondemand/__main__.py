from ondemand.cli.cli import main

main()
