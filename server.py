"""
FastMCP Server exposing the stargazer export as a tool.
"""

from fastmcp import FastMCP
from config import logger
from errors import StargazerError
from main import run

SYSTEM_PROMPT = """
You help users collect the list of people who starred a GitHub repository.
Ask for the repository owner and name if they are not given; do not guess them.
"""

mcp = FastMCP("StarTracker", instructions=SYSTEM_PROMPT)


# Core implementation (testable without the FastMCP decorator)
def _export_stargazers_impl(owner: str, repository: str, path: str = None, token: str = None) -> str:
    """
    Export every stargazer of owner/repository to a CSV file.

    Args:
        owner: The organization or owner of the repository.
        repository: The repository name.
        path: Optional output file (defaults to <owner>-<repository>-stargazers.csv).
        token: Optional GitHub token (defaults to GH_TOKEN env).
    """
    try:
        output, written = run(owner, repository, path=path, token=token)
    except StargazerError as e:
        logger.error(f"Error in export_stargazers: {e}")
        return f"Error in export_stargazers: {e}"

    logger.info(f"Exported {written} stargazers for {owner}/{repository} to {output}")
    return f"Successfully exported {written} stargazers of '{owner}/{repository}' to {output}."


@mcp.tool(name="export_stargazers")
def export_stargazers_tool(owner: str, repository: str, path: str = None, token: str = None) -> str:
    """
    Write the full list of users who starred a GitHub repository to a CSV file.

    Args:
        owner: The organization or owner of the repository.
        repository: The repository name.
        path: Optional output file path.
        token: Optional GitHub personal access token (defaults to GH_TOKEN env).
    """
    return _export_stargazers_impl(owner, repository, path, token)


def run_server():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    run_server()
