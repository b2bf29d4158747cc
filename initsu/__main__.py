from initsu.project import main

main()
