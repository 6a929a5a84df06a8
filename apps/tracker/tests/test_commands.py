from io import StringIO

import pytest
from django.core.management import call_command

from apps.tracker.models import Student

pytestmark = pytest.mark.django_db


def test_seed_students():
    out = StringIO()
    call_command('seed_students', '--count', '3', '--seed', '1', stdout=out)
    assert Student.objects.count() == 3
    assert list(Student.objects.order_by('student_no').values_list('student_no', flat=True)) == [
        'S0001', 'S0002', 'S0003',
    ]
    assert "Created 3 students." in out.getvalue()


def test_seed_students_continues_numbering():
    call_command('seed_students', '--count', '2', stdout=StringIO())
    call_command('seed_students', '--count', '2', stdout=StringIO())
    assert Student.objects.filter(student_no='S0004').exists()
