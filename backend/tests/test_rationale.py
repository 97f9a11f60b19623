from types import SimpleNamespace

import pytest

from config import settings
from models.schemas.personal_info import Achievement, PersonalInformation
from models.schemas.recommendation import AcademicProfile, BoostBreakdown
from services import gemini_client
from services.rationale import (
    boost_phrase,
    deterministic_rationale,
    explain,
    generate_rationale,
    match_quality,
)


class TestBoostPhrase:
    def test_no_boost_no_phrase(self):
        assert boost_phrase(BoostBreakdown()) is None

    def test_strong_math_comes_first(self, strong_student, tech_job):
        from services.booster import compute_boost_breakdown

        phrase = boost_phrase(compute_boost_breakdown(strong_student, tech_job))
        assert phrase == "strong math skills align with this technical field"

    def test_weak_subject_not_named(self):
        bd = BoostBreakdown(
            math=0.02,
            total=0.02,
            profile=AcademicProfile(math_strength=0.6, performance="needs_improvement"),
        )
        assert boost_phrase(bd) is None

    def test_achievement_count(self):
        bd = BoostBreakdown(
            achievements=0.02,
            relevant_achievements=["Science fair", "Math olympiad"],
            total=0.02,
        )
        assert boost_phrase(bd) == "2 relevant achievements"

    def test_single_skill(self):
        bd = BoostBreakdown(skills=0.015, matching_skills=["design"], total=0.015)
        assert boost_phrase(bd) == "1 matching skill"

    def test_excellent_record_is_last_resort(self):
        bd = BoostBreakdown(
            academic=0.05,
            total=0.05,
            profile=AcademicProfile(performance="excellent"),
        )
        assert boost_phrase(bd) == "outstanding academic record"


class TestExplain:
    def test_strong_match_lists_three_traits(self, analytical_user, tech_job):
        drivers = explain(analytical_user, None, tech_job, final_score=0.9)
        assert drivers == ["Analytical", "Technical", "Adaptable"]

    def test_weak_match_lists_two_traits(self, analytical_user, tech_job):
        drivers = explain(analytical_user, None, tech_job, final_score=0.3)
        assert drivers == ["Analytical", "Technical"]

    def test_boost_phrase_appended(self, analytical_user, care_job):
        info = PersonalInformation(
            achievements=[Achievement(title="Medical mission volunteer")],
            consent_to_use=True,
        )
        drivers = explain(analytical_user, info, care_job, final_score=0.8)
        assert drivers[-1] == "1 relevant achievement"

    def test_never_empty(self, art_job):
        assert explain([0.0] * 8, None, art_job, final_score=0.0)


@pytest.mark.parametrize(
    "score,quality",
    [(0.95, "an excellent"), (0.85, "a very strong"), (0.72, "a strong"),
     (0.65, "a good"), (0.5, "a moderate"), (0.2, "a potential")],
)
def test_match_quality(score, quality):
    assert match_quality(score) == quality


class TestDeterministicRationale:
    def test_job_path_details(self, tech_job):
        text = deterministic_rationale(
            tech_job,
            ["Analytical", "Technical", "strong math skills align with this technical field"],
            0.85,
            {"analytical": 0.9, "technical": 0.6},
            "strong math skills align with this technical field",
        )
        assert text.startswith("This path is a very strong match for you.")
        assert "Your Analytical, Technical strengths" in text
        assert "Additionally, strong math skills align with this technical field." in text
        assert "$70K - $150K" in text
        assert "Bachelor's" in text
        assert "25" in text
        assert "analytical mindset" in text
        assert "technical aptitude" not in text  # 0.6 is not a standout trait

    def test_declining_field(self, tech_job):
        job = tech_job.model_copy(update={"growth_rate": -2})
        text = deterministic_rationale(job, ["Analytical"], 0.6, {})
        assert "slower" in text

    def test_track_mentions_programs(self, stem_track):
        text = deterministic_rationale(stem_track, ["Analytical"], 0.7, {})
        assert "BS Computer Science and BS Biology" in text


class TestGenerateRationale:
    @pytest.mark.asyncio
    async def test_template_when_llm_disabled(self, tech_job):
        text = await generate_rationale(tech_job, ["Analytical"], 0.8, {"analytical": 0.8})
        assert text.startswith("This path is a very strong match")

    @pytest.mark.asyncio
    async def test_uses_gemini_when_configured(self, monkeypatch, tech_job):
        prompts = []

        async def fake_generate_json(prompt):
            prompts.append(prompt)
            return {"rationale": "  You'd love building software.  "}

        monkeypatch.setattr(settings, "use_llm_rationale", True)
        monkeypatch.setattr(settings, "gemini_api_key", "test-key")
        monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)

        text = await generate_rationale(tech_job, ["Analytical"], 0.8, {"analytical": 0.8})
        assert text == "You'd love building software."
        assert "Software Engineer" in prompts[0]
        assert "$70K - $150K" in prompts[0]

    @pytest.mark.asyncio
    async def test_falls_back_when_gemini_fails(self, monkeypatch, tech_job):
        async def failing_generate_json(prompt):
            return None

        monkeypatch.setattr(settings, "use_llm_rationale", True)
        monkeypatch.setattr(settings, "gemini_api_key", "test-key")
        monkeypatch.setattr(gemini_client, "generate_json", failing_generate_json)

        text = await generate_rationale(tech_job, ["Analytical"], 0.8, {})
        assert text.startswith("This path is a very strong match")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [["not", "a", "dict"], "just text", 42, {"rationale": ["x"]}])
    async def test_falls_back_on_unexpected_reply_shape(self, monkeypatch, tech_job, reply):
        async def odd_generate_json(prompt):
            return reply

        monkeypatch.setattr(settings, "use_llm_rationale", True)
        monkeypatch.setattr(settings, "gemini_api_key", "test-key")
        monkeypatch.setattr(gemini_client, "generate_json", odd_generate_json)

        text = await generate_rationale(tech_job, ["Analytical"], 0.8, {})
        assert text.startswith("This path is a very strong match")

    @pytest.mark.asyncio
    async def test_prompt_includes_grades_only_with_consent(self, monkeypatch, tech_job, strong_student):
        prompts = []

        async def fake_generate_json(prompt):
            prompts.append(prompt)
            return {"rationale": "ok"}

        monkeypatch.setattr(settings, "use_llm_rationale", True)
        monkeypatch.setattr(settings, "gemini_api_key", "test-key")
        monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)

        await generate_rationale(tech_job, ["Analytical"], 0.8, {}, strong_student)
        hidden = strong_student.model_copy(update={"consent_to_use": False})
        await generate_rationale(tech_job, ["Analytical"], 0.8, {}, hidden)

        assert "Academic Background" in prompts[0]
        assert "Academic Background" not in prompts[1]


class TestGeminiClient:
    @staticmethod
    def _fake_client(text):
        async def generate_content(**kwargs):
            return SimpleNamespace(text=text)

        return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))

    @pytest.mark.asyncio
    async def test_parses_fenced_json_object(self, monkeypatch):
        client = self._fake_client('```json\n{"rationale": "hi"}\n```')
        monkeypatch.setattr(gemini_client, "get_client", lambda: client)
        assert await gemini_client.generate_json("prompt") == {"rationale": "hi"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ['["a", "b"]', '"plain"', "not json"])
    async def test_non_object_reply_is_none(self, monkeypatch, text):
        client = self._fake_client(text)
        monkeypatch.setattr(gemini_client, "get_client", lambda: client)
        assert await gemini_client.generate_json("prompt") is None
