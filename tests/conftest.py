from unittest.mock import Mock

import pytest


def _edge(login, starred_at="2024-01-02T03:04:05Z", email=None, location=None,
          followers=0, following=0, hireable=False):
    return {
        "starredAt": starred_at,
        "node": {
            "login": login,
            "email": email,
            "location": location,
            "followers": {"totalCount": followers},
            "following": {"totalCount": following},
            "isHireable": hireable,
        },
    }


def _payload(edges, has_next_page=False, end_cursor=None):
    return {
        "data": {
            "repository": {
                "stargazers": {
                    "edges": edges,
                    "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
                }
            }
        }
    }


def _response(payload=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def make_edge():
    """Builds one raw stargazer edge as GitHub returns it."""
    return _edge


@pytest.fixture
def make_payload():
    """Builds a full GraphQL response body around a list of edges."""
    return _payload


@pytest.fixture
def make_response():
    """Builds a mocked requests.Response."""
    return _response
