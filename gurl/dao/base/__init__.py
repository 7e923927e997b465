from gurl.dao.base.link_base_dao import LinkBaseDAO, LinkTransaction


__all__ = [
    'LinkBaseDAO',
    'LinkTransaction',
]
