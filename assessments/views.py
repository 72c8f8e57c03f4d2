from rest_framework import permissions, status, views
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from .controller import ExamSessionController
from .errors import HTTP_STATUS, Rejection
from .phases import PHASES, PhaseKind, UnknownPhase, get_phase, next_phase
from .serializers import DeadlineSerializer, PhaseProgressSerializer, PhaseSerializer


def rejection_response(outcome):
    return Response(
        {"success": False, "error": outcome.message, "code": outcome.reason},
        status=HTTP_STATUS.get(Rejection(outcome.reason), status.HTTP_400_BAD_REQUEST),
    )


def unknown_phase_response(phase):
    return Response({"success": False, "error": f"Unknown phase {phase}"}, status=status.HTTP_404_NOT_FOUND)


class PhaseListView(views.APIView):
    """The four phases in order, with what each one expects."""
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        phases = [PHASES[number] for number in sorted(PHASES)]
        return Response(PhaseSerializer(phases, many=True).data)


class PhaseProgressView(views.APIView):
    """Per-phase state (not started / in progress / submitted) for one candidate."""
    permission_classes = [permissions.AllowAny]

    def get(self, request, examination_id):
        outcome = ExamSessionController.for_request(request).progress(examination_id)
        if not outcome.ok:
            return rejection_response(outcome)
        return Response({
            "examination_id": examination_id,
            "phases": PhaseProgressSerializer(outcome.data['phases'], many=True).data,
        })


class PhaseDeadlineView(views.APIView):
    """
    Remaining time for a phase. The first call starts the clock; later calls
    (page reloads included) only read it. Unknown identifiers get no clock.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, examination_id, phase):
        try:
            phase_spec = get_phase(phase)
        except UnknownPhase:
            return unknown_phase_response(phase)

        controller = ExamSessionController.for_request(request)
        found = controller.validate_identifier(examination_id)
        if not found.ok:
            return rejection_response(found)

        tracker = controller.tracker
        remaining = tracker.remaining(examination_id, phase_spec.number)
        serializer = DeadlineSerializer({
            "examination_id": examination_id,
            "phase": phase_spec.number,
            "duration_seconds": tracker.duration,
            "remaining_seconds": remaining,
            "expired": remaining == 0,
            "started_at": tracker.anchor(examination_id, phase_spec.number),
        })
        return Response(serializer.data)


class SubmitPhaseView(views.APIView):
    """
    Single submission for a phase.
    Phases 1-2 take JSON: { "answers": { "<question key>": "<option>", ... } }
    Phases 3-4 take multipart with one `file` field.
    """
    permission_classes = [permissions.AllowAny]
    parser_classes = (JSONParser, MultiPartParser, FormParser)

    def post(self, request, examination_id, phase):
        try:
            phase_spec = get_phase(phase)
        except UnknownPhase:
            return unknown_phase_response(phase)

        controller = ExamSessionController.for_request(request)
        if phase_spec.kind == PhaseKind.ANSWERS:
            answers = request.data.get('answers') if hasattr(request.data, 'get') else None
            outcome = controller.submit_answers(examination_id, phase_spec.number, answers)
        else:
            outcome = controller.submit_upload(examination_id, phase_spec.number, request.FILES.get('file'))

        if not outcome.ok:
            return rejection_response(outcome)

        upcoming = next_phase(phase_spec.number)
        return Response(
            {
                "success": True,
                "id": outcome.record_id,
                "next_phase": upcoming.number if upcoming else None,
                **outcome.data,
            },
            status=status.HTTP_201_CREATED,
        )
