# didadmin/api/query.py
# -*- coding: utf-8 -*-
"""Query-string parsing shared by the list endpoints."""
from flask import abort

from didadmin.services.view_service import SortSpec, SORT_DIRECTIONS

RESERVED_ARGS = ('search', 'sort', 'direction')


def parse_view_args(args, columns) -> tuple[str | None, dict, SortSpec | None]:
    """
    Read ``search``, ``sort``, ``direction`` and repeated column filters
    (``?status=active&status=pending&state=Texas``) from request args.

    Filters on columns outside ``columns`` are ignored. An unknown sort column or
    direction aborts with 400.
    """
    search = args.get('search') or None

    filters = {}
    for column in args.keys():
        if column in RESERVED_ARGS or column not in columns:
            continue
        values = [value for value in args.getlist(column) if value != '']
        if values:
            filters[column] = set(values)

    sort = None
    sort_column = args.get('sort')
    if sort_column:
        if sort_column not in columns:
            abort(400, description=f"Cannot sort by '{sort_column}'.")
        direction = (args.get('direction') or 'asc').lower()
        if direction not in SORT_DIRECTIONS:
            abort(400, description=f"Invalid sort direction. Allowed values: {', '.join(SORT_DIRECTIONS)}.")
        sort = SortSpec(column=sort_column, direction=direction)

    return search, filters, sort


def envelope(data=None, message=None, **extra) -> dict:
    """The JSON envelope every endpoint answers with."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    body.update(extra)
    return body
