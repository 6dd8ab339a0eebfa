from miro_mcp.cli import main

main()
