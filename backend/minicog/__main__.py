from minicog.app import main

main()
