from rest_framework import permissions, views
from rest_framework.response import Response

from assessments.controller import ExamSessionController, Outcome
from assessments.errors import Rejection
from assessments.views import rejection_response
from .serializers import ExaminationRecordSerializer, ValidateIdentifierSerializer


class ValidateIdentifierView(views.APIView):
    """
    Candidate enters an examination ID on the landing page.
    Payload: { "examination_id": "EX-100" }
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = ValidateIdentifierSerializer(data=request.data)
        if not serializer.is_valid():
            return rejection_response(Outcome.reject(Rejection.INVALID_EXAM_ID))

        examination_id = serializer.validated_data['examination_id']
        outcome = ExamSessionController.for_request(request).validate_identifier(examination_id)
        if not outcome.ok:
            return rejection_response(outcome)

        return Response({
            "success": True,
            "exam": ExaminationRecordSerializer(outcome.record).data,
            "next_phase": 1,
        })
