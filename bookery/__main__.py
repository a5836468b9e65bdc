from bookery.app.main import main

main()
