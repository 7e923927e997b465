r"""Tabular report encoding for the management surface.

Reports are CSV text, one record per line. Rows with an empty first column
are dropped.

Example:
    >>> render_report([('https://example.com/a', '2401k3x9p200'), ('', 'skipped')])
    'https://example.com/a,2401k3x9p200\n'
"""

import csv
import io

from fastapi.responses import PlainTextResponse

from gurl.types import Report


def render_report(report: Report) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerows(row for row in report if row and row[0])
    return buffer.getvalue()


def report_response(report: Report) -> PlainTextResponse:
    return PlainTextResponse(render_report(report))
