"""
요청 스키마 검증 테스트
"""

import pytest
from pydantic import ValidationError

from showcase_api.models import (
    CreateProjectRequest,
    CreateUserRequest,
    DeleteProjectRequest,
    UpdateProjectRequest,
)
from showcase_api.models.base import is_valid_image_url, is_valid_url


class TestUrlPatterns:
    """링크/이미지 URL 패턴 테스트"""

    @pytest.mark.parametrize(
        "value",
        [
            "https://github.com/user/repo",
            "http://www.example.com",
            "example.org/download?id=1",
        ],
    )
    def test_valid_urls(self, value):
        assert is_valid_url(value)

    @pytest.mark.parametrize("value", ["not a url", "localhost", "x"])
    def test_invalid_urls(self, value):
        assert not is_valid_url(value)

    @pytest.mark.parametrize(
        "value",
        [
            "https://example.com/images/hero.png",
            "http://cdn.example.net/a/b/icon.jpg",
            "https://example.com/pic.jpeg",
            "https://example.com/anim.gif",
            "https://store-images.s-microsoft.com/image/apps.12345.png",
            "https://store-images.s-microsoft.com/image/apps.9999",
        ],
    )
    def test_valid_image_urls(self, value):
        assert is_valid_image_url(value)

    @pytest.mark.parametrize(
        "value",
        ["https://example.com/page", "hero.png", "ftp://example.com/hero.png"],
    )
    def test_invalid_image_urls(self, value):
        assert not is_valid_image_url(value)


class TestCreateProjectRequest:
    """프로젝트 등록 요청 검증"""

    def test_valid_request(self, valid_project_body):
        request = CreateProjectRequest.model_validate(valid_project_body)

        assert request.app_name == "CoolApp"
        assert request.is_private is False
        assert request.needs_manual_review is None
        assert request.launch_year is None

    @pytest.mark.parametrize("field", ["appName", "description", "role", "category", "heroImage", "isPrivate"])
    def test_required_fields(self, valid_project_body, field):
        body = dict(valid_project_body)
        del body[field]

        with pytest.raises(ValidationError):
            CreateProjectRequest.model_validate(body)

    def test_empty_app_name_rejected(self, valid_project_body):
        with pytest.raises(ValidationError):
            CreateProjectRequest.model_validate({**valid_project_body, "appName": ""})

    @pytest.mark.parametrize("field", ["downloadLink", "githubLink", "externalLink"])
    def test_invalid_link(self, valid_project_body, field):
        with pytest.raises(ValidationError, match=f"Invalid {field}"):
            CreateProjectRequest.model_validate({**valid_project_body, field: "not a url"})

    def test_invalid_hero_image(self, valid_project_body):
        with pytest.raises(ValidationError, match="Invalid heroImage"):
            CreateProjectRequest.model_validate({**valid_project_body, "heroImage": "https://example.com/page"})

    def test_invalid_app_icon(self, valid_project_body):
        with pytest.raises(ValidationError, match="Invalid appIcon"):
            CreateProjectRequest.model_validate({**valid_project_body, "appIcon": "icon"})

    def test_launch_year_rejected(self, valid_project_body):
        """등록 시 런치 연도 지정 불가"""
        with pytest.raises(ValidationError, match="launchYear cannot be set when registering"):
            CreateProjectRequest.model_validate({**valid_project_body, "launchYear": 2026})

    def test_populate_by_field_name(self):
        request = CreateProjectRequest(
            app_name="App",
            description="d",
            role="Developer",
            category="Other",
            hero_image="https://example.com/h.png",
            is_private=True,
        )
        assert request.app_name == "App"


class TestUpdateProjectRequest:
    """프로젝트 수정 요청 검증"""

    def test_only_set_fields_dumped(self):
        request = UpdateProjectRequest.model_validate({"description": "new", "githubLink": None})

        assert request.model_dump(exclude_unset=True) == {"description": "new", "github_link": None}

    def test_launch_year_allowed(self):
        request = UpdateProjectRequest.model_validate({"launchYear": 2026})
        assert request.launch_year == 2026

    def test_link_validation_applies(self):
        with pytest.raises(ValidationError, match="Invalid downloadLink"):
            UpdateProjectRequest.model_validate({"downloadLink": "nope"})


class TestOtherRequests:
    def test_delete_requires_app_name(self):
        with pytest.raises(ValidationError):
            DeleteProjectRequest.model_validate({})

    def test_user_email_lowercased(self):
        request = CreateUserRequest.model_validate({"name": "Jo", "email": "Jo@Example.COM"})
        assert request.email == "jo@example.com"

    def test_user_invalid_email(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            CreateUserRequest.model_validate({"name": "Jo", "email": "not-an-email"})
