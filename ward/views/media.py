"""
Patient media endpoints.

``POST /api/media`` accepts either a JSON reference to a file hosted
elsewhere (``fileUrl``) or a multipart upload in the ``file`` field, which
is size and type checked and stored under ``MEDIA_ROOT``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsResidentOrHead, IsStaff
from ward.serializers.clinical import MediaReferenceSerializer, MediaUploadSerializer, format_media
from ward.services.clinical import ClinicalRecords
from ward.services.stores import get_record_store


@api_view(['POST'])
@permission_classes([IsResidentOrHead])
def upload_media(request):
    records = ClinicalRecords(get_record_store())
    if 'file' in request.FILES:
        s = MediaUploadSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        upload = vd['file']
        media = records.attach_media(
            request.user, vd['patientId'],
            file=upload,
            file_name=upload.name,
            file_type=vd['fileType'],
            content_type=getattr(upload, 'content_type', '') or '',
            size=upload.size,
            description=vd.get('description', ''),
        )
    else:
        s = MediaReferenceSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        media = records.attach_media(
            request.user, vd['patientId'],
            file_name=vd['fileName'],
            file_url=vd['fileUrl'],
            file_type=vd['fileType'],
            description=vd.get('description', ''),
        )
    return Response(format_media(media), status=201)


@api_view(['GET'])
@permission_classes([IsStaff])
def patient_media(request, patient_id: int):
    items = ClinicalRecords(get_record_store()).media(request.user, patient_id)
    return Response([format_media(m) for m in items])


@api_view(['DELETE'])
@permission_classes([IsResidentOrHead])
def delete_media(request, media_id: int):
    ClinicalRecords(get_record_store()).delete_media(request.user, media_id)
    return Response(status=204)
