from skyjo import Cell, Grid


def test_round_end_score_counts_every_cell():
    g = Grid.from_values([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 0]], face_up=True)
    assert g.full_sum() == 66
    assert g.visible_sum() == 66


def test_face_down_cells_score_at_full_value_but_not_visibly():
    g = Grid.from_values([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 0]])
    g.flip(0, 0)
    assert g.full_sum() == 66
    assert g.visible_sum() == 1


def test_removed_column_of_fives_scores_zero():
    g = Grid.from_values([[5, 1, 1, 1], [5, 1, 1, 1], [5, 1, 1, 1]])
    for r in range(3):
        g.cells[r][0] = Cell(5, face_up=(r != 1), removed=True)
    assert g.full_sum() == 9
    assert g.visible_sum() == 0


def test_clear_columns_needs_three_face_up_equal_values():
    g = Grid.from_values([[7, 2, 3, 4], [7, 2, 6, 8], [7, 2, 9, 0]])
    g.flip(0, 0)
    g.flip(1, 0)
    assert g.clear_columns() == []
    g.flip(2, 0)
    assert g.clear_columns() == [0]
    assert all(g.cell(r, 0).removed for r in range(3))
    # column 1 matches but is still face-down
    assert not any(g.cell(r, 1).removed for r in range(3))


def test_clear_columns_is_idempotent():
    g = Grid.from_values([[3, 3, 1, 2], [3, 3, 4, 5], [3, 3, 6, 7]], face_up=True)
    first = g.clear_columns()
    snapshot = [list(row) for row in g.cells]
    second = g.clear_columns()
    assert first == [0, 1]
    assert second == []
    assert g.cells == snapshot


def test_removed_cells_keep_frozen_value_and_cannot_flip_or_count():
    g = Grid.from_values([[3, 1, 1, 2], [3, 4, 4, 5], [3, 6, 6, 7]], face_up=True)
    g.clear_columns()
    assert g.cell(0, 0) == Cell(3, face_up=True, removed=True)
    assert not g.can_flip(0, 0)
    assert g.values().count(3) == 3
    assert g.all_revealed_or_removed()


def test_can_flip_out_of_bounds_is_false():
    g = Grid()
    assert not g.can_flip(3, 0)
    assert not g.can_flip(0, 4)
    assert not g.can_flip(-1, 0)
    assert g.can_flip(2, 3)
