"""
GitHub GraphQL client for fetching the stargazers of a repository.
"""

import json
import time
from datetime import datetime, timezone

import requests

from config import (
    GRAPHQL_URL,
    PAGE_SIZE,
    REQUEST_DELAY_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    USER_AGENT,
    logger,
)
from errors import ParseError, RemoteError, TransportError
from models import Page, StarEvent, User

STARGAZERS_QUERY = """
{
    repository(owner: %(owner)s, name: %(name)s) {
        stargazers(first: %(first)d%(after)s) {
            edges {
                starredAt
                node {
                    login
                    email
                    location
                    followers {
                        totalCount
                    }
                    following {
                        totalCount
                    }
                    isHireable
                }
            }
            pageInfo {
                hasNextPage
                endCursor
            }
        }
    }
}
"""


class FixedDelay:
    """Sleep a fixed number of seconds before every request."""

    def __init__(self, seconds=REQUEST_DELAY_SECONDS, sleep=None):
        self.seconds = seconds
        self._sleep = sleep

    def wait(self):
        (self._sleep or time.sleep)(self.seconds)


class NoDelay:
    """Send requests back to back."""

    def wait(self):
        return None


def build_query(owner, repo_name, page_size=PAGE_SIZE, cursor=None):
    """
    Build the GraphQL document for one page of stargazers.

    String arguments are emitted as JSON literals, which are valid GraphQL strings.
    The `after` argument is only present when a cursor is given.
    """
    after = f", after: {json.dumps(cursor)}" if cursor is not None else ""
    return STARGAZERS_QUERY % {
        "owner": json.dumps(owner),
        "name": json.dumps(repo_name),
        "first": page_size,
        "after": after,
    }


def _field(obj, key, path, expected):
    """Fetch obj[key], checking presence and type. `expected` may include type(None)."""
    if not isinstance(obj, dict):
        raise ParseError(f"expected an object at {path or '<root>'}, got {type(obj).__name__}")
    if key not in obj:
        raise ParseError(f"missing field {path + '.' if path else ''}{key}")
    value = obj[key]
    # bool is a subclass of int, counts must not accept it
    if isinstance(value, bool) and bool not in expected:
        raise ParseError(f"wrong type for {path + '.' if path else ''}{key}: bool")
    if not isinstance(value, expected):
        raise ParseError(
            f"wrong type for {path + '.' if path else ''}{key}: {type(value).__name__}"
        )
    return value


def _parse_timestamp(value, path):
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ParseError(f"invalid timestamp at {path}: {value!r}") from None
    if parsed.tzinfo is None:
        raise ParseError(f"timestamp without UTC offset at {path}: {value!r}")
    return parsed.astimezone(timezone.utc)


def _count(obj, path):
    value = _field(obj, "totalCount", path, (int,))
    if value < 0:
        raise ParseError(f"negative count at {path}.totalCount: {value}")
    return value


def _parse_user(node, path):
    followers = _field(node, "followers", path, (dict,))
    following = _field(node, "following", path, (dict,))
    return User(
        login=_field(node, "login", path, (str,)),
        email=_field(node, "email", path, (str, type(None))),
        location=_field(node, "location", path, (str, type(None))),
        followers_count=_count(followers, f"{path}.followers"),
        following_count=_count(following, f"{path}.following"),
        is_hireable=_field(node, "isHireable", path, (bool,)),
    )


def parse_page(payload):
    """
    Convert a decoded GraphQL response into a Page.

    Raises ParseError when the envelope does not have the expected shape.
    """
    # e.g. NOT_FOUND comes back as 200 with "errors" and a null repository
    if (
        isinstance(payload, dict)
        and payload.get("errors")
        and not (isinstance(payload.get("data"), dict) and payload["data"].get("repository"))
    ):
        if not isinstance(payload["errors"], list):
            raise ParseError(f"GraphQL errors field is not a list: {payload['errors']!r}")
        messages = "; ".join(
            str(err.get("message", err)) if isinstance(err, dict) else str(err)
            for err in payload["errors"]
        )
        raise ParseError(f"GraphQL query returned errors: {messages}")

    data = _field(payload, "data", "", (dict,))
    repository = _field(data, "repository", "data", (dict,))
    stargazers = _field(repository, "stargazers", "data.repository", (dict,))
    base = "data.repository.stargazers"
    raw_edges = _field(stargazers, "edges", base, (list,))
    page_info = _field(stargazers, "pageInfo", base, (dict,))

    edges = []
    for index, edge in enumerate(raw_edges):
        path = f"{base}.edges[{index}]"
        starred_at = _field(edge, "starredAt", path, (str,))
        node = _field(edge, "node", path, (dict,))
        edges.append(StarEvent(
            starred_at=_parse_timestamp(starred_at, f"{path}.starredAt"),
            user=_parse_user(node, f"{path}.node"),
        ))

    return Page(
        edges=tuple(edges),
        has_next_page=_field(page_info, "hasNextPage", f"{base}.pageInfo", (bool,)),
        end_cursor=_field(page_info, "endCursor", f"{base}.pageInfo", (str, type(None))),
    )


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"GitHub GraphQL API request failed ({response.status_code})"


def fetch_page(owner, repo_name, token, page_size=PAGE_SIZE, cursor=None, rate_limiter=None):
    """
    Fetch a single page of stargazers.

    Args:
        owner (str): Owner or organization of the repository.
        repo_name (str): Repository name.
        token (str): GitHub token sent as a bearer credential.
        page_size (int): Number of edges to request.
        cursor (str, optional): endCursor of the previous page.
        rate_limiter: Object with a wait() method, called before sending.

    Returns:
        Page: The parsed edges and pagination info.
    """
    query = build_query(owner, repo_name, page_size, cursor)
    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": f"Bearer {token}",
    }

    (rate_limiter or FixedDelay()).wait()

    logger.debug(f"Requesting stargazers for {owner}/{repo_name} after cursor {cursor!r}")
    try:
        response = requests.post(
            GRAPHQL_URL,
            json={"query": query},
            headers=headers,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise TransportError(f"request to {GRAPHQL_URL} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise RemoteError(
            f"failed to fetch data from GitHub GraphQL API: {_error_message(response)}",
            status=response.status_code,
            url=GRAPHQL_URL,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise ParseError(f"response body is not valid JSON: {e}") from e

    return parse_page(payload)


def iter_pages(owner, repo_name, token, page_size=PAGE_SIZE, rate_limiter=None):
    """Yield pages in order, threading each endCursor into the next request."""
    rate_limiter = rate_limiter or FixedDelay()
    cursor = None
    has_next_page = True

    while has_next_page:
        page = fetch_page(owner, repo_name, token, page_size, cursor, rate_limiter)
        yield page
        cursor = page.end_cursor
        has_next_page = page.has_next_page


def _log_progress(total):
    logger.info(f"Users: {total}")


def fetch_all(owner, repo_name, token, page_size=PAGE_SIZE, rate_limiter=None, on_progress=None):
    """
    Fetch every stargazer of a repository.

    Pages are requested one at a time until GitHub reports no next page.
    Any error aborts the whole run; no partial list is returned.

    Returns:
        list: StarEvent objects in the order GitHub returned them.
    """
    report = on_progress or _log_progress
    results = []

    for page in iter_pages(owner, repo_name, token, page_size, rate_limiter):
        results.extend(page.edges)
        report(len(results))

    return results
