DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# per-screen page sizes used by the panel listings
PERMISSIONS_PAGE_SIZE = 12
ROLES_PAGE_SIZE = 10
TICKETS_PAGE_SIZE = 50
ORGANIZATIONS_PAGE_SIZE = 100

def normalize_pagination(page_raw, limit_raw, default_limit=DEFAULT_LIMIT):
    try:
        page = int(page_raw) if page_raw is not None else 1
        limit = int(limit_raw) if limit_raw is not None else default_limit
    except ValueError:
        raise ValueError('page/limit must be int')
    limit = max(1, min(limit, MAX_LIMIT))
    page = max(1, page)
    return page, limit
