"""
Investment dashboard views

Reads are open to any authenticated user; writes (equipment replacement,
Excel import) need a system admin or facilitator.
"""
import logging

from django.http import HttpResponse
from django.utils import timezone
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from accounts.permissions import IsAdminOrFacilitator, IsAdminOrFacilitatorOrReadOnly
from capacity.exceptions import BadRequest
from . import excel, prioritization
from .serializers import EquipmentSerializer, ImportSerializer, WeightChangeSerializer
from .store import EQUIPMENT, PRODUCTS, InvestmentDataStore

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _weights_from_query(params):
    weights = prioritization.default_weights()
    for key in prioritization.WEIGHT_KEYS:
        raw = params.get(key)
        if raw is None or raw == '':
            continue
        try:
            value = float(raw)
        except ValueError:
            raise BadRequest(f'{key} must be a number')
        if not 0 <= value <= 100:
            raise BadRequest(f'{key} must be between 0 and 100')
        weights[key] = value
    return weights


@api_view(['GET', 'PUT'])
@permission_classes([IsAdminOrFacilitatorOrReadOnly])
def equipment(request):
    """
    GET  ?filter=all|critical|high-revenue|strategic
    PUT  replace the whole production-line list
    """
    store = InvestmentDataStore()
    if request.method == 'GET':
        items = prioritization.filter_equipment(
            store.equipment(), request.query_params.get('filter', 'all')
        )
        return Response({'equipment': items, 'count': len(items)})

    serializer = EquipmentSerializer(data=request.data, many=True)
    serializer.is_valid(raise_exception=True)
    items = []
    for index, item in enumerate(serializer.validated_data):
        item = dict(item)
        item.setdefault('id', index + 1)
        items.append(item)
    store.save(EQUIPMENT, items)
    logger.info("Equipment list replaced by %s (%d lines)", request.user.email, len(items))
    return Response({'equipment': items, 'count': len(items)})


@api_view(['GET'])
def equipment_statistics(request):
    filter_name = request.query_params.get('filter', 'all')
    items = prioritization.filter_equipment(InvestmentDataStore().equipment(), filter_name)
    return Response(dict(prioritization.equipment_statistics(items), filter=filter_name))


@api_view(['GET'])
def product_rankings(request):
    """Weighted product ranking; weights come from query params, 20 each by default."""
    weights = _weights_from_query(request.query_params)
    return Response({
        'weights': weights,
        'products': prioritization.rank_products(InvestmentDataStore().products(), weights),
    })


@api_view(['POST'])
def product_weights(request):
    """
    Rebalance the ranking weights after one of them changed.

    Request body:
    {
        "weights": {"market_demand": 40, ...},
        "changed": "market_demand",
        "reset": false               (true returns the defaults)
    }
    """
    serializer = WeightChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if data['reset']:
        weights = prioritization.default_weights()
    else:
        weights = dict(prioritization.default_weights(), **data['weights'])
        weights = prioritization.normalize_weights(weights, data['changed'])

    return Response({
        'weights': weights,
        'products': prioritization.rank_products(InvestmentDataStore().products(), weights),
    })


@api_view(['GET'])
def scenario_list(request):
    scenarios = InvestmentDataStore().scenarios()
    return Response({
        'scenarios': [dict(scenario, key=key) for key, scenario in scenarios.items()],
    })


@api_view(['GET'])
def scenario_detail(request, key):
    store = InvestmentDataStore()
    scenario = prioritization.scenario_detail(store.scenarios(), key, store.equipment())
    if scenario is None:
        raise NotFound('Scenario not found')
    return Response(scenario)


@api_view(['POST'])
@permission_classes([IsAdminOrFacilitator])
@parser_classes([MultiPartParser, FormParser])
def import_data(request):
    """Upload an .xlsx with equipment or product rows (multipart field `file`)."""
    serializer = ImportSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    upload = serializer.validated_data['file']

    kind, records = excel.parse_import(upload)
    InvestmentDataStore().save(EQUIPMENT if kind == 'equipment' else PRODUCTS, records)
    logger.info(
        "Imported %d %s records from %s (by %s)", len(records), kind, upload.name, request.user.email
    )
    return Response({
        'type': kind,
        'count': len(records),
        'message': f'Successfully imported {len(records)} {kind} records',
    })


@api_view(['GET'])
def export_data(request):
    store = InvestmentDataStore()
    content = excel.build_workbook(store.equipment(), store.products(), store.scenarios())
    filename = f"NVI_Investment_Dashboard_{timezone.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
