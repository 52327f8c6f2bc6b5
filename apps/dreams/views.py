import logging
from django.contrib.auth.decorators import login_required
from django.http import Http404, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods
from .adapters.orm_repositories import DjangoDreamRepository
from .application.use_cases import DashboardUseCase, GoalHealthUseCase
from .conf import get_dreams_config
from .domain.validation import InvalidSnapshotError

logger = logging.getLogger(__name__)


@login_required
@require_http_methods(["GET"])
def dashboard_view(request):
    """Dashboard marzeń: metryki, alerty i tempo całego portfela."""
    config = get_dreams_config()
    limit = config['ALERT_DISPLAY_LIMIT']
    use_case = DashboardUseCase(DjangoDreamRepository(), config)
    report = use_case.execute(request.user.id, timezone.now())

    return JsonResponse({
        'dreams': [g.to_dict(alert_limit=limit) for g in report.goals],
        'portfolio': report.portfolio.to_dict(),
        'skipped': report.skipped,
    })


@login_required
@require_http_methods(["GET"])
def dream_health_view(request, pk):
    """Szczegóły zdrowia jednego marzenia (pełna lista alertów)."""
    repository = DjangoDreamRepository()

    # Cudze marzenie = 404, tak jak get_object_or_404(..., user=request.user)
    if not repository.owns_goal(request.user.id, pk):
        raise Http404("Dream not found")

    use_case = GoalHealthUseCase(repository, get_dreams_config())
    try:
        report = use_case.execute(pk, timezone.now())
    except InvalidSnapshotError as e:
        logger.warning("Dream %s has invalid data: %s", pk, e)
        return JsonResponse({'error': str(e)}, status=400)

    if report is None:
        raise Http404("Dream not found")

    return JsonResponse(report.to_dict())
