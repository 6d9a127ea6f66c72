"""
Excel import and export for the investment dashboard (openpyxl)
"""
import io
import json
import logging
import math
import re

import openpyxl
from openpyxl.styles import Font

from capacity.exceptions import BadRequest

logger = logging.getLogger(__name__)

EQUIPMENT_HEADERS = {'name', 'investment', 'impact_score'}
PRODUCT_HEADERS = {'name', 'market_demand', 'profit_margin'}

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


def header_key(value):
    """impactScore, 'Impact Score' and impact_score all become impact_score."""
    if value is None:
        return ''
    text = _CAMEL_BOUNDARY.sub('_', str(value).strip())
    return re.sub(r'[\s\-]+', '_', text).lower()


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def to_float(value, default):
    if _is_blank(value):
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def to_int(value, default):
    number = to_float(value, None)
    return default if number is None else int(number)


def to_text(value, default):
    return default if _is_blank(value) else str(value).strip()


def _row_id(row, index):
    value = row.get('id')
    if _is_blank(value):
        return index + 1
    number = to_float(value, None)
    if number is not None and number.is_integer():
        return int(number)
    return str(value).strip()


def map_equipment_row(row, index):
    return {
        'id': _row_id(row, index),
        'name': to_text(row.get('name'), ''),
        'investment': to_float(row.get('investment'), 0),
        'impact_score': to_int(row.get('impact_score'), 0),
        'complexity': to_int(row.get('complexity'), 50),
        'risk_level': to_text(row.get('risk_level'), 'Medium'),
        'priority': to_text(row.get('priority'), 'Medium'),
        'gmp_compliance': to_int(row.get('gmp_compliance'), 70),
        'revenue_impact': to_float(row.get('revenue_impact'), 0),
        'strategic_importance': to_text(row.get('strategic_importance'), 'Medium'),
        'roi_timeline': to_float(row.get('roi_timeline'), 4.0),
        'category': to_text(row.get('category'), 'General'),
        'description': to_text(row.get('description'), ''),
    }


def map_product_row(row, index):
    return {
        'id': _row_id(row, index),
        'name': to_text(row.get('name'), ''),
        'type': to_text(row.get('type'), 'General'),
        'market_demand': to_int(row.get('market_demand'), 50),
        'profit_margin': to_int(row.get('profit_margin'), 50),
        'technical_feasibility': to_int(row.get('technical_feasibility'), 50),
        'competitive_position': to_int(row.get('competitive_position'), 50),
        'regulatory_complexity': to_int(row.get('regulatory_complexity'), 50),
        'estimated_investment': to_text(row.get('estimated_investment'), '0M'),
        'current_production': to_text(row.get('current_production'), 'N/A'),
        'potential_production': to_text(row.get('potential_production'), 'N/A'),
    }


def read_rows(file_obj):
    """First worksheet as a list of dicts keyed by normalized header."""
    try:
        wb = openpyxl.load_workbook(file_obj, read_only=True, data_only=True)
    except Exception as exc:
        logger.warning("Failed to open uploaded workbook: %s", exc)
        raise BadRequest('Failed to parse Excel file')

    try:
        ws = wb.worksheets[0]
        rows = list(ws.iter_rows(values_only=True))
    finally:
        wb.close()

    if not rows:
        return []
    headers = [header_key(h) for h in rows[0]]
    items = []
    for row in rows[1:]:
        if not row or all(_is_blank(cell) for cell in row):
            continue
        items.append({
            key: (row[i] if i < len(row) else None)
            for i, key in enumerate(headers) if key
        })
    return items


def detect_kind(rows):
    """'equipment', 'products' or None, judged from the first row's columns."""
    if not rows:
        return None
    columns = set(rows[0])
    if EQUIPMENT_HEADERS <= columns:
        return 'equipment'
    if PRODUCT_HEADERS <= columns:
        return 'products'
    return None


def parse_import(file_obj):
    """
    Parse an uploaded workbook.

    Returns (kind, records) with records mapped onto the dashboard fields and
    defaults filled in. Raises BadRequest when the sheet is neither
    equipment nor product data.
    """
    rows = read_rows(file_obj)
    kind = detect_kind(rows)
    if kind is None:
        raise BadRequest('Unable to determine data format. Please check your Excel file.')
    mapper = map_equipment_row if kind == 'equipment' else map_product_row
    return kind, [mapper(row, index) for index, row in enumerate(rows)]


def _cell(value):
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return value


def _write_sheet(wb, title, records):
    ws = wb.create_sheet(title)
    headers = []
    for record in records:
        for key in record:
            if key not in headers:
                headers.append(key)
    if not headers:
        return ws
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for record in records:
        ws.append([_cell(record.get(key)) for key in headers])
    return ws


def build_workbook(equipment, products, scenarios):
    """Equipment, Products and Scenarios sheets, as xlsx bytes."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    _write_sheet(wb, 'Equipment', equipment)
    _write_sheet(wb, 'Products', products)
    _write_sheet(wb, 'Scenarios', [
        dict({'scenario': key.capitalize()}, **scenario) for key, scenario in scenarios.items()
    ])

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
