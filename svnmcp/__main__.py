from svnmcp.cli.app import main

main()
