from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsStaff
from ward.services.statistics import dashboard
from ward.services.stores import get_record_store


@api_view(['GET'])
@permission_classes([IsStaff])
def dashboard_view(request):
    """Counts for the ward control panel."""
    return Response(dashboard(request.user, get_record_store()))
