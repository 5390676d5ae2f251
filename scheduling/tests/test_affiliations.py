from decimal import Decimal

import pytest

from scheduling.exceptions import NotFoundError, ValidationError
from scheduling.models import Affiliation
from scheduling.services.affiliations import affiliate_doctor, create_affiliation, list_doctor_affiliations


def test_department_must_match_a_specialization():
    with pytest.raises(ValidationError):
        create_affiliation(1, 1, 1, '50.00', ['Cardiology'], 'Neurology')


def test_match_is_exact():
    with pytest.raises(ValidationError):
        create_affiliation(1, 1, 1, '50.00', ['cardiology'], 'Cardiology')


@pytest.mark.parametrize('fee', ['0', '-10', 0, 'abc', '0.001'])
def test_fee_must_be_positive(fee):
    with pytest.raises(ValidationError):
        create_affiliation(1, 1, 1, fee, ['Cardiology'], 'Cardiology')


def test_valid_affiliation_keeps_fee():
    a = create_affiliation(1, 2, 3, '75.50', ['Cardiology'], 'Cardiology')
    assert a.pk is None
    assert a.consultation_fee == Decimal('75.50')
    assert (a.doctor_id, a.hospital_id, a.department_id) == (1, 2, 3)


@pytest.mark.django_db
def test_affiliate_doctor_persists_and_allows_duplicates(make_doctor, make_hospital):
    doctor = make_doctor('doc1', specializations=['Cardiology'])
    h = make_hospital(departments=['Cardiology', 'Neurology'])
    cardiology = h.departments.get(name='Cardiology')

    first = affiliate_doctor(doctor, cardiology.id, Decimal('75.50'))
    second = affiliate_doctor(doctor, cardiology.id, Decimal('80.00'))
    assert first.pk != second.pk
    assert Affiliation.objects.filter(doctor=doctor).count() == 2

    with pytest.raises(ValidationError):
        affiliate_doctor(doctor, h.departments.get(name='Neurology').id, Decimal('50.00'))
    with pytest.raises(NotFoundError):
        affiliate_doctor(doctor, 9999, Decimal('50.00'))

    listed = list_doctor_affiliations(doctor.id)
    assert [a['consultationFee'] for a in listed] == ['75.50', '80.00']
    assert listed[0]['departmentName'] == 'Cardiology'
