"""CSV download responses for the back-office exports."""

import csv
from decimal import Decimal

from django.http import HttpResponse


def _cell(value):
    if value is None:
        return ''
    if isinstance(value, Decimal):
        return f'{value:.2f}'
    return str(value)


def csv_response(filename, header, rows):
    """
    Build an ``attachment`` response with one header row and data rows.

    Args:
        filename: Download name, e.g. ``purchases.csv``.
        header: Column titles.
        rows: Iterable of row sequences. ``None`` becomes an empty cell and
            Decimals are written with two decimals.
    """
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    writer = csv.writer(response)
    writer.writerow(header)
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return response
