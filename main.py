"""
Command-line entry point: writes every stargazer of a repository to a CSV file.
"""

import argparse
import sys

from config import get_github_token, logger, set_verbose
from errors import ConfigError, StageError, StargazerError
from export_stars import default_output_path, write_csv
from github_client import fetch_all


def build_parser():
    parser = argparse.ArgumentParser(
        prog="star-tracker",
        description="Writes a list of stargazers for a GitHub repository to a CSV.",
    )
    parser.add_argument("owner", help="The organization or owner of the repository.")
    parser.add_argument("repository", help="The repository.")
    parser.add_argument("-p", "--path", help="The path to the output file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each request.")
    return parser


def run(owner, repository, path=None, token=None, rate_limiter=None):
    """
    Fetch all stargazers and write them to `path`.

    Errors are re-raised with the stage that failed prefixed to the message.

    Returns:
        tuple: (output path, number of rows written)
    """
    owner = (owner or "").strip()
    repository = (repository or "").strip()
    try:
        if not owner or not repository:
            raise ConfigError("owner and repository must be non-empty")
        api_token = get_github_token(token)
    except ConfigError as e:
        raise StageError("configuration", e) from e

    try:
        stars = fetch_all(owner, repository, api_token, rate_limiter=rate_limiter)
    except StargazerError as e:
        raise StageError("fetching stargazers", e) from e

    # Only opened once the fetch has fully succeeded
    output = path or default_output_path(owner, repository)
    try:
        written = write_csv(stars, output)
    except (OSError, ValueError) as e:
        # ValueError covers UnicodeEncodeError from unencodable text
        raise StageError(f"writing output to {output}", e) from e

    return output, written


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    try:
        output, written = run(args.owner, args.repository, args.path)
    except StargazerError as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"Done: {written} stargazers saved to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
