from redmine_mcp.mcp_server import main

main()
