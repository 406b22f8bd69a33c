import pytest

from backend.api import app, get_scheduler_factory

SAMPLE_PAYLOAD = {
    "classLevel": "11",
    "stream": "Science",
    "targetExam": "JEE",
    "startTime": "09:00",
    "endTime": "17:00",
    "numberOfDays": "30",
    "purpose": "Syllabus completion",
}

FULL_WEEK_TABLE = """| Days | Time Slot | Monday | Tuesday | Wednesday | Thursday | Friday | Saturday | Sunday |
|------|-----------|--------|---------|-----------|----------|--------|----------|--------|
| Day 1-7 | 09:00-11:00 | Physics: Units and Measurements | Chemistry: Some Basic Concepts | Maths: Sets | Physics: Motion in a Straight Line | Review/Practice | Chemistry: Structure of Atom | Quiz: Week 1 |
| Day 1-7 | 11:00-11:15 | Break | Break | Break | Break | Break | Break | Break |
| Day 1-7 | 11:15-13:00 | Maths: Relations and Functions | Physics: Motion in a Plane | Chemistry: Classification of Elements | Maths: Trigonometric Functions | Review/Practice | List the doubts | Rest |
"""

WEEKDAY_TABLE = """| Time Slot | Sunday | Monday | Tuesday | Wednesday | Thursday | Friday |
|-----------|--------|--------|---------|-----------|----------|--------|
| 09:00-11:00 | Rest | Physics | Chemistry | Maths | Physics | Review/Practice |
| 11:00-11:15 | Break | Break | Break | Break | Break | Break |
| 11:15-13:00 | Quiz | Maths | Physics | Chemistry | Maths | Review/Practice |
"""


class FakeScheduler:
    """Records every request and answers with a fixed table"""

    def __init__(self, response=FULL_WEEK_TABLE, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def generate_timetable(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def fake_scheduler():
    scheduler = FakeScheduler()
    app.dependency_overrides[get_scheduler_factory] = lambda: (lambda: scheduler)
    yield scheduler
    app.dependency_overrides.clear()
