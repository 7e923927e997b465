"""Private management surface

Endpoints (CSV `text/plain` reports unless stated otherwise):

    POST /link/add            form `link`: newline-separated URLs   -> (url, key) rows
    GET  /link/byHash?hash=   raw URL body                          -> 200 or empty 404
    GET  /link/list?start=&end=                                     -> (key, url) rows, max 30
    POST /hash/remove         form `hash`: newline-separated keys   -> (key) rows
    POST /hash/cleanup        form `start`, `end`                   -> ('total', count)
    GET  /backup              binary store image, attachment

HTTP responses:
    400: Bad client request
        body: short cause, e.g. "Empty 'link' argument"
    404: Key not found (byHash only)
        body: empty
    500: Internal server error
        body: 'Db error'

The surface runs on a trusted network: there is no authentication.

Example:
    >>> from gurl.dao import LinkSQLiteDAO
    >>> app = create_app(LinkSQLiteDAO(database='links.db'))
    >>> # curl -d 'link=https://example.com/a' http://localhost:7070/link/add
    >>> # https://example.com/a,2401k3x9p200
"""

from fastapi import APIRouter, Depends, FastAPI, Form, Query
from fastapi.responses import PlainTextResponse, Response

from gurl.constants import Defaults
from gurl.dao.base import LinkBaseDAO
from gurl.operations import add_links, cleanup_links, export_backup, list_links, lookup_link, remove_links, split_lines
from gurl.servers.dependencies import get_dao
from gurl.servers.errors import register_error_handlers
from gurl.servers.management.report import report_response


router = APIRouter()


@router.post('/link/add')
def add_link(link: str = Form(''), dao: LinkBaseDAO = Depends(get_dao)) -> PlainTextResponse:
    return report_response(add_links(dao, split_lines(link)))


@router.get('/link/byHash')
def link_by_hash(key: str = Query('', alias='hash'), dao: LinkBaseDAO = Depends(get_dao)) -> Response:
    record = lookup_link(dao, key.encode('utf-8'))
    if record is None:
        return Response(status_code=404)
    return Response(content=record.target, media_type='text/plain')


@router.get('/link/list')
def link_list(start: str = '', end: str = '', dao: LinkBaseDAO = Depends(get_dao)) -> PlainTextResponse:
    return report_response(list_links(dao, start.encode('utf-8'), end.encode('utf-8')))


@router.post('/hash/remove')
def remove_hash(keys: str = Form('', alias='hash'), dao: LinkBaseDAO = Depends(get_dao)) -> PlainTextResponse:
    return report_response(remove_links(dao, [key.encode('utf-8') for key in split_lines(keys)]))


@router.post('/hash/cleanup')
def cleanup_hash(start: str = Form(''), end: str = Form(''), dao: LinkBaseDAO = Depends(get_dao)) -> PlainTextResponse:
    removed = cleanup_links(dao, start.encode('utf-8'), end.encode('utf-8'))
    return report_response([('total', str(removed))])


@router.get('/backup')
def backup(dao: LinkBaseDAO = Depends(get_dao)) -> Response:
    snapshot = export_backup(dao)
    return Response(
        content=snapshot.data,
        media_type='application/octet-stream',
        headers={
            'Content-Disposition': f'attachment; filename="{Defaults.BACKUP_FILENAME}"',
            'Content-Length': str(snapshot.size),
        },
    )


def create_app(dao: LinkBaseDAO) -> FastAPI:
    """Create the management application bound to one store handle."""
    app = FastAPI(title='gurl management', docs_url=None, redoc_url=None, openapi_url=None)
    app.state.dao = dao
    app.include_router(router)
    register_error_handlers(app)
    return app
