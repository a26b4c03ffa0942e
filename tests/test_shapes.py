import random

import pytest

from block_puzzle.game import COLOR_PALETTE, SHAPE_CATALOG, Color, Shape, ShapeGenerator, catalog_index, generate_batch


def test_catalog_templates_are_normalized():
    for name, blocks in SHAPE_CATALOG.items():
        shape = Shape(name=name, blocks=blocks)
        assert min(r for r, _ in shape.blocks) == 0
        assert min(c for _, c in shape.blocks) == 0
        assert len(set(shape.blocks)) == shape.block_count


def test_catalog_has_lines_one_to_five_in_both_directions():
    sizes = {name: len(blocks) for name, blocks in SHAPE_CATALOG.items()}
    assert sizes["dot"] == 1
    for n in range(2, 6):
        assert sizes[f"line{n}_h"] == n
        assert sizes[f"line{n}_v"] == n
    assert sizes["square2"] == 4
    assert sizes["square3"] == 9


def test_shape_dimensions():
    shape = Shape(name="l_0", blocks=SHAPE_CATALOG["l_0"])
    assert (shape.height, shape.width) == (3, 2)
    assert shape.cells_at(2, 5) == [(2, 5), (3, 5), (4, 5), (4, 6)]


def test_unnormalized_shape_is_rejected():
    with pytest.raises(ValueError):
        Shape(name="bad", blocks=((1, 1), (1, 2)))
    with pytest.raises(ValueError):
        Shape(name="empty", blocks=())


def test_generate_batch_size_and_catalog_membership():
    batch = generate_batch(3, random.Random(1))
    assert len(batch) == 3
    for shape in batch:
        assert shape.name in SHAPE_CATALOG
        assert shape.color in COLOR_PALETTE


def test_seeded_generator_is_reproducible():
    a = ShapeGenerator(random.Random(42)).generate_batch(10)
    b = ShapeGenerator(random.Random(42)).generate_batch(10)
    assert a == b


def test_reseeding_restarts_the_draw():
    gen = ShapeGenerator(random.Random())
    gen.seed(7)
    first = gen.generate_batch(5)
    gen.seed(7)
    assert gen.generate_batch(5) == first


def test_zero_and_negative_counts():
    gen = ShapeGenerator(random.Random(0))
    assert gen.generate_batch(0) == []
    with pytest.raises(ValueError):
        gen.generate_batch(-1)


def test_repeated_draws_leave_catalog_untouched():
    snapshot = dict(SHAPE_CATALOG)
    gen = ShapeGenerator(random.Random(3))
    for _ in range(50):
        gen.generate_batch(3)
    assert SHAPE_CATALOG == snapshot


def test_color_is_independent_of_shape():
    gen = ShapeGenerator(random.Random(5))
    colors_by_name = {}
    for shape in gen.generate_batch(600):
        colors_by_name.setdefault(shape.name, set()).add(shape.color)
    assert any(len(colors) > 1 for colors in colors_by_name.values())
    assert set().union(*colors_by_name.values()) == set(Color)


def test_catalog_index_follows_catalog_order():
    names = list(SHAPE_CATALOG)
    shape = Shape(name=names[4], blocks=SHAPE_CATALOG[names[4]], color=Color.CYAN)
    assert catalog_index(shape) == 4
