"""
Testes unitários dos registros simples e das configurações do professor.
"""

import pytest

from lumen.config import settings
from lumen.schemas.teacher_settings import TeacherSettingsUpdate
from lumen.services.board_service import (
    save_calendar_event,
    save_exam,
    save_notice,
    update_settings,
)


def test_save_notice_sem_id_cria(store):
    notice = save_notice(store, {"date": "2025-04-01", "notes": "Feira cultural"})

    assert notice.id == 1000
    assert store.notices == [notice]
    assert store.is_dirty


def test_save_notice_com_id_substitui(seeded_store):
    before = seeded_store.notices

    notice = save_notice(seeded_store, {"id": 400, "date": "2025-03-02", "notes": "Reunião adiada"})

    assert seeded_store.notices == [notice]
    assert before[0].notes == "Reunião de pais"


def test_save_notice_id_inexistente(seeded_store):
    with pytest.raises(ValueError):
        save_notice(seeded_store, {"id": 999, "date": "2025-03-02"})


def test_save_exam_aceita_chaves_salvas(store):
    exam = save_exam(store, {"livro": "Kids 2", "temas": "Animals", "linkOral": "https://exemplo/oral"})

    assert exam.book == "Kids 2"
    assert exam.oral_link == "https://exemplo/oral"


def test_save_calendar_event_tipo_invalido(store):
    with pytest.raises(ValueError):
        save_calendar_event(store, {"date": "2025-05-05", "title": "Prova", "type": "outro"})
    assert store.calendar_events == []


def test_configuracoes_padrao(store):
    assert store.settings.teacher_name == settings.DEFAULT_TEACHER_NAME
    assert store.settings.bonus_value == settings.DEFAULT_BONUS_VALUE


def test_update_settings_altera_apenas_campos_informados(store):
    current = store.settings

    result = update_settings(store, TeacherSettingsUpdate(teacher_name="  Prof. Rita  ", hourly_rate=30.0))

    assert result is current
    assert result.teacher_name == "Prof. Rita"
    assert result.hourly_rate == 30.0
    assert result.school_name == settings.DEFAULT_SCHOOL_NAME
    assert store.is_dirty
