from slgen.cli import main

main()
