"""
Relationship vocabulary for the concept graph.

Relationship Types:
    depends_on     - Source requires the target to exist/work.
    implements     - Source is an implementation of the target.
    generalizes    - Source is a broader category of the target.
    conflicts_with - Source cannot coexist with the target.

The store itself accepts any label; the tool layer restricts callers to
this whitelist via ``models.validators.RelationType``.
"""

RELATION_TYPES: frozenset[str] = frozenset({"depends_on", "implements", "generalizes", "conflicts_with"})

# Impact severity bands, keyed by the number of affected concepts.
IMPACT_HIGH_THRESHOLD = 5
IMPACT_MEDIUM_THRESHOLD = 2


def impact_severity(affected_count: int) -> str:
    """Classify how far a change to a concept would ripple."""
    if affected_count > IMPACT_HIGH_THRESHOLD:
        return "high"
    if affected_count > IMPACT_MEDIUM_THRESHOLD:
        return "medium"
    return "low"
