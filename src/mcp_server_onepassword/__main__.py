"""
1Password Connect MCP Server - Module Entry Point

Allows running the server as a Python module:
    python -m mcp_server_onepassword
"""
from mcp_server_onepassword.server import main

if __name__ == "__main__":
    main()
