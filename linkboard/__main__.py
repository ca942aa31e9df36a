from linkboard.app import main

main()
