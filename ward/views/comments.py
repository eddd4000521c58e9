from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsStaff
from ward.serializers.bulletin import CommentCreateSerializer, format_comment
from ward.services.bulletin import Bulletin
from ward.services.stores import get_record_store


@api_view(['POST'])
@permission_classes([IsStaff])
def create_comment(request):
    s = CommentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    comment = Bulletin(get_record_store()).post_comment(
        request.user, s.validated_data['newsId'], s.validated_data['content']
    )
    return Response(format_comment(comment), status=201)


@api_view(['GET'])
@permission_classes([IsStaff])
def news_comments(request, news_id: int):
    return Response([format_comment(c) for c in Bulletin(get_record_store()).comments(request.user, news_id)])


@api_view(['DELETE'])
@permission_classes([IsStaff])
def delete_comment(request, comment_id: int):
    Bulletin(get_record_store()).delete_comment(request.user, comment_id)
    return Response(status=204)
