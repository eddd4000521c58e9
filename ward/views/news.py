"""
Bulletin board announcements.

Any staff member may publish; edits and deletion are limited to the
author and the head of department.  Deleting an announcement removes its
comments in the same transaction.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsStaff
from ward.serializers.bulletin import AnnouncementSerializer, format_announcement
from ward.services.bulletin import Bulletin
from ward.services.stores import get_record_store


@api_view(['GET', 'POST'])
@permission_classes([IsStaff])
def news(request):
    bulletin = Bulletin(get_record_store())
    if request.method == 'GET':
        return Response([format_announcement(a) for a in bulletin.announcements(request.user)])

    s = AnnouncementSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    announcement = bulletin.publish(request.user, s.validated_data['title'], s.validated_data['content'])
    return Response(format_announcement(announcement), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaff])
def news_detail(request, news_id: int):
    bulletin = Bulletin(get_record_store())
    if request.method == 'GET':
        return Response(format_announcement(bulletin.get(request.user, news_id)))

    if request.method == 'DELETE':
        bulletin.delete(request.user, news_id)
        return Response(status=204)

    s = AnnouncementSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    announcement = bulletin.modify(request.user, news_id, **s.validated_data)
    return Response(format_announcement(announcement))
