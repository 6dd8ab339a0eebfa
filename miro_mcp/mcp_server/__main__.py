from miro_mcp.mcp_server import main

main()
