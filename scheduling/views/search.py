from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from scheduling.serializers.booking import SearchQuerySerializer
from scheduling.services.search import SearchCriteria, list_specializations, search


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_doctors(request):
    """Search bookable offerings.
    Query params:
      - hospitalId: restrict to one hospital
      - specialization: exact specialization
      - q: case-insensitive match on doctor name or specialization
      - date: YYYY-MM-DD, local calendar day of the slot start
    """
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    criteria = SearchCriteria(
        hospital_id=v.get('hospitalId'),
        specialization=(v.get('specialization') or '').strip() or None,
        term=(v.get('q') or '').strip() or None,
        target_date=v.get('date'),
    )
    data = [offering.as_dict() for offering in search(criteria)]
    return Response({'ok': True, 'data': data, 'total': len(data)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def specializations(request):
    return Response({'ok': True, 'data': list_specializations()})
