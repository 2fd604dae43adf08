from tool_server.cli import main

main()
