from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.services import dashboard as svc


@error_messages(get='Failed to fetch dashboard stats')
@api_view(['GET'])
def dashboard_stats(request):
    return Response(svc.get_dashboard_stats())


@error_messages(get='Failed to fetch adherence data')
@api_view(['GET'])
def dashboard_adherence(request):
    return Response(svc.get_dashboard_adherence_data())
