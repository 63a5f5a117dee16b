"""
Testes do gerador de ids por timestamp.
"""

from lumen.ids import TimestampIdGenerator


def test_ids_a_partir_do_timestamp():
    generator = TimestampIdGenerator(clock=lambda: 1.5)

    assert generator() == 1500


def test_ids_no_mesmo_milissegundo_nao_colidem():
    generator = TimestampIdGenerator(clock=lambda: 1.5)

    assert [generator(), generator(), generator()] == [1500, 1501, 1502]


def test_ids_com_relogio_voltando():
    ticks = iter([2.0, 1.0, 3.0])
    generator = TimestampIdGenerator(clock=lambda: next(ticks))

    assert [generator(), generator(), generator()] == [2000, 2001, 3000]
