from request_mcp.server import main

main()
