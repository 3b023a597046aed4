from tabview.cli import main

main()
