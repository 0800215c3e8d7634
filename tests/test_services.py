import json
from types import SimpleNamespace

import pytest

from CVapp.models import Resume
from CVapp.schemas import CVRecord
from CVapp.services import (
    DatabaseCVStore,
    MockEnhancementService,
    OpenAIEnhancementService,
    get_enhancement_service,
)
from tests.conftest import JANE_CV


class StubCompletions:
    def __init__(self, content):
        self.content = content
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def stub_client(content):
    completions = StubCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.mark.django_db
class TestDatabaseCVStore:
    def test_returns_latest_resume(self, user):
        Resume.objects.create(name="old.pdf", extracted_cv=dict(JANE_CV, name="Old"), uploaded_by=user)
        Resume.objects.create(name="new.pdf", extracted_cv=JANE_CV, uploaded_by=user)

        record = DatabaseCVStore().load_cv(user.id)

        assert record == CVRecord.model_validate(JANE_CV)

    def test_no_resume(self, user):
        assert DatabaseCVStore().load_cv(user.id) is None

    def test_resume_without_extracted_cv(self, user):
        Resume.objects.create(name="scan.pdf", extracted_cv=None, uploaded_by=user)

        assert DatabaseCVStore().load_cv(user.id) is None

    def test_does_not_modify_store(self, user):
        resume = Resume.objects.create(name="cv.pdf", extracted_cv=JANE_CV, uploaded_by=user)

        DatabaseCVStore().load_cv(user.id)
        DatabaseCVStore().load_cv(user.id)

        resume.refresh_from_db()
        assert resume.extracted_cv == JANE_CV
        assert Resume.objects.count() == 1


def test_mock_enhancement_tidies_whitespace():
    record = CVRecord.model_validate(
        dict(JANE_CV, name="  Jane   Doe ", skills=[" Go ", "Go"])
    )

    enhanced = MockEnhancementService().enhance(record)

    assert enhanced.name == "Jane Doe"
    assert enhanced.skills == ("Go", "Go")
    assert enhanced.contact == record.contact
    assert enhanced is not record


class TestOpenAIEnhancementService:
    def test_sends_cv_and_parses_reply(self, jane_cv):
        reply = dict(JANE_CV, skills=["Go (Golang)"])
        client, completions = stub_client(json.dumps(reply))
        service = OpenAIEnhancementService(None, model="test-model", temperature=0.2, client=client)

        enhanced = service.enhance(jane_cv)

        assert enhanced.skills == ("Go (Golang)",)
        request = completions.requests[0]
        assert request["model"] == "test-model"
        assert request["temperature"] == 0.2
        assert request["response_format"] == {"type": "json_object"}
        assert json.loads(request["messages"][1]["content"]) == JANE_CV

    @pytest.mark.parametrize("content", ["not json", "[]", json.dumps({"skills": []}), None])
    def test_invalid_reply_raises_value_error(self, jane_cv, content):
        client, _ = stub_client(content)
        service = OpenAIEnhancementService(None, client=client)

        with pytest.raises(ValueError):
            service.enhance(jane_cv)


def test_mock_service_without_api_key(settings):
    settings.OPENAI_API_KEY = None

    assert isinstance(get_enhancement_service(), MockEnhancementService)


def test_openai_service_with_api_key(settings):
    settings.OPENAI_API_KEY = "sk-test"
    settings.OPENAI_MODEL = "gpt-test"

    service = get_enhancement_service()

    assert isinstance(service, OpenAIEnhancementService)
    assert service.model == "gpt-test"
