# /homework-tracker/homework_tracker/services/database_helpers/sample_data.py

"""
Sample rows used to seed an empty store on first start. The values are a
convenience for demos and are not part of the storage contract.
"""

import random
from datetime import date, timedelta
from typing import Dict, List, Optional

from ...models.homework_model import HomeworkStatus

RELATIONAL_SAMPLE_CLASSES: List[Dict] = [
    {"name": "Math A", "description": "Middle school grade 1 math"},
    {"name": "English B", "description": "High school grade 2 English"},
]

# `class_index` points into RELATIONAL_SAMPLE_CLASSES.
RELATIONAL_SAMPLE_STUDENTS: List[Dict] = [
    {"class_index": 0, "name": "Kim Cheolsu", "grade": "M1", "phone": "010-1234-5678"},
    {"class_index": 0, "name": "Lee Younghee", "grade": "M1", "phone": "010-2345-6789"},
    {"class_index": 1, "name": "Park Minsu", "grade": "H2", "phone": "010-3456-7890"},
    {"class_index": 1, "name": "Jung Sujin", "grade": "H2", "phone": "010-4567-8901"},
]

EPHEMERAL_SAMPLE_CLASS: Dict = {"name": "Math A", "description": "Middle school grade 1 math"}

EPHEMERAL_SAMPLE_STUDENT: Dict = {
    "name": "Kim Cheolsu",
    "grade": "M1",
    "phone": "010-1234-5678",
    "parentPhone": "010-8765-4321",
    "note": "Very interested in math",
}

SAMPLE_HISTORY_DAYS = 30


def random_recent_statuses(
    end: date,
    days: int = SAMPLE_HISTORY_DAYS,
    rng: Optional[random.Random] = None,
) -> List[Dict]:
    """
    Builds one randomly chosen status per day for the `days` days ending on
    `end`, newest first.
    """
    rng = rng or random.Random()
    statuses = list(HomeworkStatus)
    return [
        {"date": (end - timedelta(days=offset)).isoformat(), "status": rng.choice(statuses)}
        for offset in range(days)
    ]
