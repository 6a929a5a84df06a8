import pytest
from django.core.cache import cache

from apps.quran.reference import QuranReference


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def reference():
    return QuranReference.offline()


@pytest.fixture
def student(db):
    from apps.tracker.models import Student
    return Student.objects.create(student_no="S0001", name="Yusuf Karim")


@pytest.fixture
def teacher_client(client, django_user_model):
    user = django_user_model.objects.create_user(username="teacher", password="pass1234")
    client.force_login(user)
    return client
