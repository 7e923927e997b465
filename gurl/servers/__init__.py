from gurl.servers.management.app import create_app as create_management_app
from gurl.servers.redirect.app import create_app as create_redirect_app


__all__ = [
    'create_management_app',
    'create_redirect_app',
]
