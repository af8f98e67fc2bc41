from coretest.cli import main

main()
