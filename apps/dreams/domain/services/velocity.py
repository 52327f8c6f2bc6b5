# apps/dreams/domain/services/velocity.py
from typing import List

from apps.dreams.domain.entities import GoalVelocity, PortfolioSummary, VelocityInput
from apps.dreams.domain.values import round_half_up, round_tenths

EXCELLENT = 'Excellent'
ON_TRACK = 'On Track'
NEEDS_ATTENTION = 'Needs Attention'
AT_RISK = 'At Risk'


class VelocityClassifier:
    """
    Tempo portfela: czy postęp nadąża za upływem czasu i wydatkami.
    Kanoniczna wersja 4-poziomowa (ważone tempo), bez klasyfikatora procentu ukończenia.
    """

    def __init__(self, thresholds: dict = None):
        self.thresholds = thresholds or {
            'excellent': 10,         # score >= 10
            'on_track': -10,         # score >= -10
            'needs_attention': -25,  # score >= -25, poniżej = At Risk
        }

    def classify(self, score: float) -> str:
        if score >= self.thresholds['excellent']:
            return EXCELLENT
        if score >= self.thresholds['on_track']:
            return ON_TRACK
        if score >= self.thresholds['needs_attention']:
            return NEEDS_ATTENTION
        return AT_RISK

    @staticmethod
    def budget_alignment(item: VelocityInput) -> float:
        """Czy wydatki idą w parze z postępem? (50 = neutralnie, gdy brak postępu i wydatków)"""
        if item.progress_pct > 0:
            return min(100.0, item.budget_pct / item.progress_pct * 100)
        return 100.0 if item.budget_pct > 0 else 50.0

    def raw_score(self, item: VelocityInput) -> float:
        if not item.has_target_date:
            return item.progress_pct - 50
        progress_delta = item.progress_pct - item.time_elapsed_pct
        return progress_delta * 0.7 + (self.budget_alignment(item) - 50) * 0.3

    def goal_velocity(self, item: VelocityInput) -> GoalVelocity:
        score = self.raw_score(item)

        # Etykieta z surowego wyniku, zaokrąglenie tylko do wyświetlenia
        return GoalVelocity(
            score=round_tenths(score),
            label=self.classify(score),
            progress_delta=round_half_up(item.progress_pct - item.time_elapsed_pct),
            budget_alignment=round_half_up(self.budget_alignment(item)),
        )

    def portfolio_score(self, items: List[VelocityInput]) -> float:
        """Średnia tempa marzeń. Pusty portfel = 0 (On Track)."""
        if not items:
            return 0.0
        scores = [self.raw_score(item) for item in items]
        return sum(scores) / len(scores)

    def classify_portfolio(self, items: List[VelocityInput]) -> str:
        return self.classify(self.portfolio_score(items))

    def summarize(self, items: List[VelocityInput]) -> PortfolioSummary:
        """Zbiorcze statystyki dla dashboardu (etapy roadmap, tempo, budżet)."""
        if not items:
            return PortfolioSummary(
                total_roadmaps=0,
                completed_roadmaps=0,
                open_roadmaps=0,
                active_dreams=0,
                velocity_score=0.0,
                overall_velocity=ON_TRACK,
                budget_health=0,
            )

        total = sum(item.phases_total for item in items)
        completed = sum(item.phases_completed for item in items)
        score = self.portfolio_score(items)

        return PortfolioSummary(
            total_roadmaps=total,
            completed_roadmaps=completed,
            open_roadmaps=total - completed,
            active_dreams=len(items),
            velocity_score=round_tenths(score),
            overall_velocity=self.classify(score),
            budget_health=round_half_up(sum(item.budget_pct for item in items) / len(items)),
        )
