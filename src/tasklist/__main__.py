from tasklist.main import main

main()
