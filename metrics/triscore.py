"""TriScore: one training score for swim, run and bike activities."""

from metrics.activity import Activity, Discipline
from metrics.registry import MetricDefinition
from metrics.swimscore import SWIMSCORE
from metrics.tss import BIKE_TSS, RUN_TSS
from metrics.values import AggregationKind, ResultSet

TRISCORE = "triscore"

DISCIPLINE_SCORES = {
    Discipline.SWIM: SWIMSCORE,
    Discipline.RUN: RUN_TSS,
    Discipline.BIKE: BIKE_TSS,
}


def make_triscore(scores: dict[Discipline, str] | None = None) -> MetricDefinition:
    """Build the selector that republishes each discipline's own score.

    Args:
        scores: Discipline to score symbol; disciplines not listed get no
            TriScore

    Returns:
        MetricDefinition for the triscore symbol
    """
    scores = dict(scores or DISCIPLINE_SCORES)

    def applicable(activity: Activity) -> bool:
        return activity.discipline in scores

    def compute(activity: Activity, results: ResultSet, config) -> float:
        return results.value_of(scores[activity.discipline], needed_by=TRISCORE)

    return MetricDefinition(
        symbol=TRISCORE,
        name="TriScore",
        compute=compute,
        applicable=applicable,
        optional_dependencies=tuple(dict.fromkeys(scores.values())),
        aggregation=AggregationKind.TOTAL,
    )


def register_triscore(registry, scores: dict[Discipline, str] | None = None) -> None:
    registry.register(make_triscore(scores))
