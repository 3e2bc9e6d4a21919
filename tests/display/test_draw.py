import chip8.common.ops as ops
from chip8.common.hwconf import GRID_WIDTH, GRID_HEIGHT

from fixtures import clock, proc  # noqa: F401


def lit(state) -> set[tuple[int, int]]:
    return {
        (x, y)
        for y, row in enumerate(state.rows())
        for x, on in enumerate(row)
        if on
    }


def test_draw_font_glyph(proc):  # noqa: F811
    s = proc.state
    s.i = 0                     # glyph "0": F0 90 90 90 F0
    s.v[1], s.v[2] = 10, 4

    proc.execute(ops.DrawSprite(1, 2, 5))

    assert lit(s) == {
        (10, 4), (11, 4), (12, 4), (13, 4),
        (10, 5), (13, 5),
        (10, 6), (13, 6),
        (10, 7), (13, 7),
        (10, 8), (11, 8), (12, 8), (13, 8),
    }
    assert s.v[0xF] == 0
    assert proc.has_drawn()
    assert not proc.has_drawn()


def test_double_draw_restores_grid(proc):  # noqa: F811
    s = proc.state
    s.grid[0] = True
    before = list(s.grid)
    s.i = 5 * 0xA
    s.v[1], s.v[2] = 3, 3

    proc.execute(ops.DrawSprite(1, 2, 5))
    assert s.grid != before
    assert s.v[0xF] == 0

    proc.execute(ops.DrawSprite(1, 2, 5))
    assert s.grid == before
    assert s.v[0xF] == 1


def test_partial_overlap_sets_collision(proc):  # noqa: F811
    s = proc.state
    s.memory[0x300] = 0x80
    s.i = 0x300
    s.flip(7, 7)

    proc.execute(ops.DrawSprite(0, 0, 1))
    assert s.v[0xF] == 0

    s.v[0] = 7
    s.v[1] = 7
    proc.execute(ops.DrawSprite(0, 1, 1))

    assert s.v[0xF] == 1
    assert not s.pixel(7, 7)
    assert s.pixel(0, 0)


def test_draw_wraps_around_edges(proc):  # noqa: F811
    s = proc.state
    s.i = 0
    s.v[1], s.v[2] = GRID_WIDTH - 2, GRID_HEIGHT - 2

    proc.execute(ops.DrawSprite(1, 2, 5))

    assert s.pixel(62, 30) and s.pixel(63, 30) and s.pixel(0, 30) and s.pixel(1, 30)
    assert s.pixel(62, 0) and s.pixel(1, 0)
    assert not s.pixel(63, 0)
    assert s.pixel(62, 2) and s.pixel(1, 2)
    assert len(lit(s)) == 14


def test_draw_reads_memory_modulo_size(proc):  # noqa: F811
    s = proc.state
    s.memory[0xFFF] = 0x80
    s.memory[0x000] = 0xF0      # first font row
    s.i = 0xFFF

    proc.execute(ops.DrawSprite(0, 0, 2))

    assert lit(s) == {(0, 0), (0, 1), (1, 1), (2, 1), (3, 1)}


def test_zero_height_sprite_draws_nothing(proc):  # noqa: F811
    proc.state.v[0xF] = 1
    proc.execute(ops.DrawSprite(0, 0, 0))

    assert lit(proc.state) == set()
    assert proc.state.v[0xF] == 0


def test_clear_is_idempotent(proc):  # noqa: F811
    s = proc.state
    s.i = 0
    proc.execute(ops.DrawSprite(0, 0, 5))

    proc.execute(ops.Clear())
    once = list(s.grid)
    proc.execute(ops.Clear())

    assert s.grid == once
    assert not any(once)
    assert len(once) == GRID_WIDTH * GRID_HEIGHT
    assert proc.has_drawn()


def test_clear_keeps_the_framebuffer_object(proc):  # noqa: F811
    s = proc.state
    grid = s.grid
    s.i = 0
    proc.execute(ops.DrawSprite(0, 0, 5))
    assert any(grid)

    proc.execute(ops.Clear())

    assert grid is s.grid
    assert not any(grid)
    assert len(grid) == GRID_WIDTH * GRID_HEIGHT
