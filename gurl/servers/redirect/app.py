"""Public redirect surface

Every request is answered by one handler:

    GET /<key>  ->  302 to the stored URL, or empty 404

HTTP responses:
    302: Successful redirect
        headers:
            Location: stored target URL
    404: No redirect
        - method is not GET
        - path is shorter than '/' + 12 key characters (no store lookup)
        - key is not in the store

The key is the fixed 12-byte window right after the leading slash; anything
past the window is ignored.

Example:
    >>> from gurl.dao import LinkSQLiteDAO
    >>> app = create_app(LinkSQLiteDAO(database='links.db'))
    >>> # curl -i http://localhost:8090/2401k3x9p200
    >>> # HTTP/1.1 302 Found
    >>> # location: https://example.com/a
"""

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import RedirectResponse, Response

from gurl.constants import KeyLayout
from gurl.dao.base import LinkBaseDAO
from gurl.resolver import resolve
from gurl.servers.dependencies import get_dao
from gurl.servers.errors import register_error_handlers
from gurl.servers.redirect.constants import KEY_NOT_FOUND, METHOD_NOT_ALLOWED, REDIRECT_SUCCESS, SHORT_PATH


logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE', 'CONNECT']


def key_from_path(path: str) -> bytes | None:
    """Return the key window of a request path, None if the path is too short."""
    raw = path.encode('utf-8')
    if len(raw) < KeyLayout.WIDTH + 1:
        return None
    return raw[1 : KeyLayout.WIDTH + 1]


@router.api_route('/{path:path}', methods=ALL_METHODS)
def redirect(request: Request, dao: LinkBaseDAO = Depends(get_dao)) -> Response:
    if request.method != 'GET':
        logger.debug('Method %s is not redirected. Responding with 404.', request.method, extra={'event': METHOD_NOT_ALLOWED})
        return Response(status_code=404)

    key = key_from_path(request.scope['path'])
    if key is None:
        logger.debug('Path too short for a key. Responding with 404.', extra={'event': SHORT_PATH})
        return Response(status_code=404)

    target = resolve(dao, key)
    if target is None:
        logger.debug('Key not found. Responding with 404.', extra={'event': KEY_NOT_FOUND, 'key': key.decode('utf-8', 'replace')})
        return Response(status_code=404)

    logger.debug('Redirecting client to target URL. Responding with 302.', extra={'event': REDIRECT_SUCCESS, 'location': target})
    return RedirectResponse(url=target, status_code=302)


def create_app(dao: LinkBaseDAO) -> FastAPI:
    """Create the redirect application bound to one store handle."""
    app = FastAPI(title='gurl redirect', docs_url=None, redoc_url=None, openapi_url=None)
    app.state.dao = dao
    app.include_router(router)
    register_error_handlers(app)
    return app
