from pyangler.cli.app import main

main()
