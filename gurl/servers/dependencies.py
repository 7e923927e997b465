from fastapi import Request

from gurl.dao.base import LinkBaseDAO


def get_dao(request: Request) -> LinkBaseDAO:
    """Return the store handle the application was created with."""
    return request.app.state.dao
