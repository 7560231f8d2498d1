"""
Default pattern set.

Loaded whenever the pattern library has no readable store on disk, then
persisted immediately so subsequent starts reload it instead of reseeding.
"""

import time

from ..models.pattern import Pattern

_SEED_DATA: list[dict] = [
    {
        "id": "restaurant_kitchen",
        "source_domain": "restaurant_kitchen",
        "abstract_structure": "Central coordination point with distributed workers claiming tasks",
        "key_features": [
            "Ticket rail / task board for visibility",
            "Workers claim tasks to avoid duplication",
            "Priority handling (VIP tickets)",
            "Station specialization (grill, fry, prep)",
            "Expeditor coordinates final assembly",
        ],
        "common_problems": [
            "Multiple workers need to see available tasks",
            "Tasks need to be done in specific order",
            "Some workers specialize in certain tasks",
            "Need to handle priority/rush orders",
        ],
        "typical_solutions": [
            "Central task queue with pull model",
            "Task states: pending, in_progress, ready, complete",
            "Worker registration by capability",
            "Dependency tracking between tasks",
        ],
        "relationships": [
            {"type": "maps_to", "target": "distributed_task_board"},
            {"type": "similar_to", "target": "kanban_board"},
        ],
    },
    {
        "id": "ant_colony",
        "source_domain": "ant_colony",
        "abstract_structure": "Decentralized coordination through pheromone trails",
        "key_features": [
            "No central coordinator",
            "Pheromone trails strengthen with use",
            "Multiple paths explored in parallel",
            "Shortest path emerges naturally",
        ],
        "common_problems": [
            "Find optimal path without global knowledge",
            "Adapt to changing conditions",
            "Load balancing across multiple paths",
        ],
        "typical_solutions": [
            "Positive feedback loops",
            "Evaporative trails (forget unused paths)",
            "Random exploration + reinforcement",
        ],
        "relationships": [
            {"type": "maps_to", "target": "load_balancing"},
            {"type": "similar_to", "target": "reinforcement_learning"},
        ],
    },
    {
        "id": "library_system",
        "source_domain": "library_system",
        "abstract_structure": "Centralized catalog with distributed lending",
        "key_features": [
            "Catalog for discovery",
            "Multiple copies of popular items",
            "Due dates and reservations",
            "Physical item tracking",
        ],
        "common_problems": [
            "Resource sharing without conflicts",
            "Fair access to limited resources",
            "Tracking resource location",
        ],
        "typical_solutions": [
            "Reservation system",
            "Check-out/check-in protocol",
            "Search and discovery interface",
            "Fine/penalty for overdue items",
        ],
        "relationships": [
            {"type": "maps_to", "target": "resource_pool"},
            {"type": "similar_to", "target": "connection_pool"},
        ],
    },
    {
        "id": "traffic_control",
        "source_domain": "traffic_control",
        "abstract_structure": "Coordinated flow control through intersection management",
        "key_features": [
            "Traffic lights for state-based flow control",
            "Sensors detect queue length",
            "Timing optimization based on demand",
            "Emergency vehicle preemption",
        ],
        "common_problems": [
            "Prevent collisions at intersections",
            "Optimize flow during varying demand",
            "Handle special cases (emergency, construction)",
        ],
        "typical_solutions": [
            "State machine (red, yellow, green)",
            "Priority queue for special cases",
            "Sensor feedback for adaptive timing",
            "Rules for right-of-way",
        ],
        "relationships": [
            {"type": "maps_to", "target": "mutex"},
            {"type": "similar_to", "target": "load_balancer"},
        ],
    },
    {
        "id": "restaurant_service",
        "source_domain": "restaurant_service",
        "abstract_structure": "Multi-tier service with dedicated roles",
        "key_features": [
            "Host: manages seating and queue",
            "Server: customer interface, order taking",
            "Kitchen: order fulfillment",
            "Bussers: cleanup between customers",
        ],
        "common_problems": [
            "Coordination between front and back of house",
            "Managing customer expectations during delays",
            "Efficient table turnover",
        ],
        "typical_solutions": [
            "Clear role boundaries",
            "Communication protocol (tickets, displays)",
            "Queue management for waiting customers",
            "Handoff protocols between roles",
        ],
        "relationships": [
            {"type": "maps_to", "target": "microservices"},
            {"type": "similar_to", "target": "tiered_architecture"},
        ],
    },
    {
        "id": "supply_chain",
        "source_domain": "supply_chain",
        "abstract_structure": "Multi-echelon inventory and logistics management",
        "key_features": [
            "Suppliers -> Warehouses -> Retailers -> Customers",
            "Just-in-time delivery",
            "Safety stock for demand variance",
            "Backorder handling",
        ],
        "common_problems": [
            "Balance inventory costs vs stockouts",
            "Coordinate across multiple levels",
            "Handle supply disruptions",
        ],
        "typical_solutions": [
            "Demand forecasting",
            "Multi-echelon inventory optimization",
            "Supplier diversification",
            "Real-time tracking",
        ],
        "relationships": [
            {"type": "maps_to", "target": "data_pipeline"},
            {"type": "similar_to", "target": "event_sourcing"},
        ],
    },
]

SEED_PATTERN_IDS: tuple[str, ...] = tuple(p["id"] for p in _SEED_DATA)


def seed_patterns() -> list[Pattern]:
    """Fresh copies of the default patterns, stamped with the current time."""
    now = time.time()
    return [Pattern.model_validate({**data, "created": now, "usage_count": 0}) for data in _SEED_DATA]
