"""Tests for the training centre."""

from datetime import datetime, timezone

import pytest
from beanie import PydanticObjectId

from winejournal.models import ModuleResult, TrainingProgress
from winejournal.services import training

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestCatalog:
    """Tests for module and question lookup."""

    def test_get_module(self):
        assert training.get_module("italian-wines-101")["region"] == "Italy"
        assert training.get_module("missing") is None

    def test_regional_quiz_uses_its_region_only(self):
        module = training.get_module("south-african-wines")
        assert [q["id"] for q in training.questions_for(module)] == ["q4", "q5"]

    def test_global_quiz_uses_every_question(self):
        module = training.get_module("wine-pairing-basics")
        assert len(training.questions_for(module)) == 5

    def test_public_questions_hide_answers(self):
        module = training.get_module("italian-wines-101")
        for question in training.public_questions(module):
            dumped = question.model_dump()
            assert "correct_answer" not in dumped
            assert "explanation" not in dumped

    def test_simulation_lookup(self):
        assert training.get_simulation("barolo-recommendation").id == "sim1"
        assert training.get_simulation("italian-wines-101") is None

    @pytest.mark.asyncio
    async def test_list_modules_marks_completed(self, init_test_db):
        progress = TrainingProgress(
            owner_id=PydanticObjectId(),
            results=[ModuleResult(module_id="italian-wines-101", score=50.0, total_questions=2)],
        )
        modules = {m.id: m for m in training.list_modules(progress)}

        assert modules["italian-wines-101"].completed is True
        assert modules["italian-wines-101"].score == 50.0
        assert modules["wine-pairing-basics"].completed is False
        assert modules["wine-pairing-basics"].score is None


class TestGradeQuiz:
    """Tests for quiz grading."""

    def test_all_correct(self):
        module = training.get_module("italian-wines-101")
        result = training.grade_quiz(module, {"q1": 1, "q2": 1}, now=NOW)
        assert result.correct == 2
        assert result.score == 100.0
        assert result.completed_at == NOW

    def test_unanswered_counts_as_wrong(self):
        module = training.get_module("italian-wines-101")
        result = training.grade_quiz(module, {"q1": 1}, now=NOW)

        assert result.correct == 1
        assert result.total_questions == 2
        assert result.score == 50.0
        unanswered = result.results[1]
        assert unanswered.selected is None
        assert unanswered.is_correct is False
        assert unanswered.explanation

    def test_score_is_rounded_percentage(self):
        module = training.get_module("wine-pairing-basics")
        result = training.grade_quiz(module, {"q1": 1, "q3": 0}, now=NOW)
        assert result.score == 20.0

        result = training.grade_quiz(training.get_module("south-african-wines"), {"q4": 1, "q5": 0})
        assert result.score == 50.0

    def test_unknown_question_ids_are_ignored(self):
        module = training.get_module("south-african-wines")
        result = training.grade_quiz(module, {"q4": 1, "q5": 2, "q99": 0})
        assert result.score == 100.0
        assert len(result.results) == 2


class TestProgress:
    """Tests for progress bookkeeping and certifications."""

    def test_empty_progress(self):
        summary = training.calculate_progress(None)
        assert summary.total_modules == 5
        assert summary.completed_modules == 0
        assert summary.average_score == 0
        assert summary.certifications == []

    @pytest.mark.asyncio
    async def test_average_over_scored_results_only(self, init_test_db):
        progress = TrainingProgress(
            owner_id=PydanticObjectId(),
            results=[
                ModuleResult(module_id="italian-wines-101", score=100.0, total_questions=2),
                ModuleResult(module_id="wine-pairing-basics", score=40.0, total_questions=5),
                ModuleResult(module_id="upselling-techniques", score=None),
            ],
            total_time_spent=47,
        )
        summary = training.calculate_progress(progress)
        assert summary.completed_modules == 3
        assert summary.average_score == 70.0
        assert summary.total_time_spent == 47
        assert summary.certifications == ["Wine Service Professional"]

    def test_certification_needs_every_module_of_region(self):
        assert training.earned_certifications({"italian-wines-101"}) == []
        assert training.earned_certifications({"italian-wines-101", "barolo-recommendation"}) == [
            "Italian Wine Specialist"
        ]
        assert training.earned_certifications({"south-african-wines"}) == ["South African Wine Specialist"]

    @pytest.mark.asyncio
    async def test_record_completion_creates_and_replaces(self, init_test_db):
        owner = PydanticObjectId()
        module = training.get_module("italian-wines-101")

        await training.record_completion(owner, module, 50.0, 2)
        progress = await training.record_completion(owner, module, 100.0, 2)

        assert len(progress.results) == 1
        assert progress.results[0].score == 100.0
        # Duration counts only the first time
        assert progress.total_time_spent == 15

        stored = await training.get_progress(owner)
        assert stored.id == progress.id

    @pytest.mark.asyncio
    async def test_record_unscored_module(self, init_test_db):
        owner = PydanticObjectId()
        progress = await training.record_completion(owner, training.get_module("upselling-techniques"))
        assert progress.results[0].score is None
        assert progress.total_time_spent == 12


class TestTrainingEndpoints:
    """Tests for /api/training."""

    @pytest.mark.asyncio
    async def test_list_modules(self, client):
        response = await client.get("/api/training/modules")
        assert response.status_code == 200
        ids = [m["id"] for m in response.json()]
        assert ids == [
            "italian-wines-101",
            "barolo-recommendation",
            "wine-pairing-basics",
            "upselling-techniques",
            "south-african-wines",
        ]

    @pytest.mark.asyncio
    async def test_questions(self, client):
        response = await client.get("/api/training/modules/italian-wines-101/questions")
        assert response.status_code == 200
        data = response.json()
        assert [q["id"] for q in data] == ["q1", "q2"]
        assert "correct_answer" not in data[0]

    @pytest.mark.asyncio
    async def test_questions_for_non_quiz(self, client):
        response = await client.get("/api/training/modules/barolo-recommendation/questions")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_module(self, client):
        response = await client.get("/api/training/modules/nope/questions")
        assert response.status_code == 404
        assert response.json()["detail"] == "Training module with ID nope not found"

    @pytest.mark.asyncio
    async def test_simulation(self, client):
        response = await client.get("/api/training/modules/barolo-recommendation/simulation")
        assert response.status_code == 200
        assert response.json()["correct_response"]

        missing = await client.get("/api/training/modules/italian-wines-101/simulation")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_submit_and_progress(self, client):
        response = await client.post(
            "/api/training/modules/italian-wines-101/submit",
            json={"answers": {"q1": 1, "q2": 0}},
        )
        assert response.status_code == 200
        result = response.json()
        assert result["score"] == 50.0
        assert result["correct"] == 1

        await client.post("/api/training/modules/barolo-recommendation/complete")

        progress = (await client.get("/api/training/progress")).json()
        assert progress["completed_modules"] == 2
        assert progress["average_score"] == 50.0
        assert progress["total_time_spent"] == 25
        assert progress["certifications"] == ["Italian Wine Specialist"]

        modules = {m["id"]: m for m in (await client.get("/api/training/modules")).json()}
        assert modules["italian-wines-101"]["completed"] is True
        assert modules["italian-wines-101"]["score"] == 50.0

    @pytest.mark.asyncio
    async def test_submit_non_quiz(self, client):
        response = await client.post(
            "/api/training/modules/upselling-techniques/submit",
            json={"answers": {}},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_complete_quiz_rejected(self, client):
        response = await client.post("/api/training/modules/italian-wines-101/complete")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_complete_microlearning(self, client):
        response = await client.post("/api/training/modules/upselling-techniques/complete")
        assert response.status_code == 200
        data = response.json()
        assert data["completed"] is True
        assert data["score"] is None

    @pytest.mark.asyncio
    async def test_progress_is_per_user(self, client, other_user_headers):
        await client.post("/api/training/modules/upselling-techniques/complete")

        response = await client.get("/api/training/progress", headers=other_user_headers)
        assert response.json()["completed_modules"] == 0
