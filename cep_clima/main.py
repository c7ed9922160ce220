"""
Ponto de entrada do servidor FastMCP do assistente de CEP e clima.
"""

from cep_clima.app import mcp
from cep_clima.config import env


def main():
    if env.IS_LOCAL:
        mcp.run()
    else:
        mcp.run(
            transport="streamable-http", host=env.MCP_HOST, port=env.MCP_PORT, path="/mcp"
        )


if __name__ == "__main__":
    main()
