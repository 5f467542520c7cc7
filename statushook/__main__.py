from statushook.main import main

main()
