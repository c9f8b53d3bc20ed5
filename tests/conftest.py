from __future__ import annotations

import django
import pytest
from django.conf import settings as django_settings
from sqlalchemy import create_engine
from sqlalchemy.orm import Session


def pytest_configure() -> None:
    if django_settings.configured:
        return
    django_settings.configure(
        INSTALLED_APPS=["translation_editor"],
        LANGUAGE_CODE="en",
        USE_I18N=True,
        TEMPLATES=[
            {
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "APP_DIRS": True,
            }
        ],
    )
    django.setup()


@pytest.fixture
def session():
    from tests.models import Base

    engine = create_engine("sqlite://", future=True)
    Base.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as db_session:
        yield db_session
    engine.dispose()
