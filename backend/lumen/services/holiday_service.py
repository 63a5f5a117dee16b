"""
Calendário inicial de feriados nacionais brasileiros.
"""

from datetime import date, timedelta
from typing import List

from lumen.schemas.board import CalendarEvent

_NATIONAL = "Feriado Nacional"
_OPTIONAL = "Ponto Facultativo Nacional"

_FIXED_HOLIDAYS = [
    (1, 1, "Confraternização Universal"),
    (4, 21, "Tiradentes"),
    (5, 1, "Dia do Trabalho"),
    (9, 7, "Independência do Brasil"),
    (10, 12, "Nossa Senhora Aparecida"),
    (11, 2, "Finados"),
    (11, 15, "Proclamação da República"),
    (11, 20, "Dia da Consciência Negra"),
    (12, 25, "Natal"),
]


def easter_sunday(year: int) -> date:
    """Domingo de Páscoa pelo algoritmo de Meeus/Jones/Butcher."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def initial_holidays(start_year: int, end_year: int) -> List[CalendarEvent]:
    """
    Gera os feriados de start_year até end_year (inclusive), ordenados por
    data e numerados de 1 a n.
    """
    entries = []
    for year in range(start_year, end_year + 1):
        for month, day, title in _FIXED_HOLIDAYS:
            entries.append((date(year, month, day), title, "feriado", _NATIONAL))
        easter = easter_sunday(year)
        entries.append((easter - timedelta(days=47), "Carnaval", "sem-aula", _OPTIONAL))
        entries.append((easter - timedelta(days=2), "Paixão de Cristo", "feriado", _NATIONAL))
        entries.append((easter + timedelta(days=60), "Corpus Christi", "sem-aula", _OPTIONAL))

    entries.sort(key=lambda e: e[0])
    return [
        CalendarEvent(id=index, date=day.isoformat(), title=title, type=kind, description=description)
        for index, (day, title, kind, description) in enumerate(entries, start=1)
    ]
