import pytest

from planmon.model import LanduseType, Model, RoadType
from planmon.render import (
    BACKGROUND_COLOR,
    BUILDING_FILL,
    END_COLOR,
    LANDUSE_COLORS,
    RAILWAY_STROKE,
    START_COLOR,
    WATER_FILL,
    Render,
    RoadRep,
    road_color,
    road_dashes,
    road_metric_width,
)
from planmon.route_model import RouteModel
from planmon.route_planner import RoutePlanner

_GRID = (0.1, 0.5, 0.9)


def _node(node_id, x, y):
    return f'<node id="{node_id}" lat="{y / 100}" lon="{x / 100}"/>'


def _way(way_id, refs, tags):
    nds = "".join(f'<nd ref="{ref}"/>' for ref in refs)
    tag_xml = "".join(f'<tag k="{k}" v="{v}"/>' for k, v in tags.items())
    return f'<way id="{way_id}">{nds}{tag_xml}</way>'


def _square(first_id, x0, y0, x1, y1):
    return [_node(first_id, x0, y0), _node(first_id + 1, x1, y0),
            _node(first_id + 2, x1, y1), _node(first_id + 3, x0, y1)]


def _ring(first_id):
    return [first_id, first_id + 1, first_id + 2, first_id + 3, first_id]


def _map_osm() -> str:
    parts = ['<osm>', '<bounds minlat="0" minlon="0" maxlat="0.01" maxlon="0.01"/>']
    for row, y in enumerate(_GRID):
        for col, x in enumerate(_GRID):
            parts.append(_node(100 + row * 3 + col, x, y))
    for row in range(3):
        parts.append(_way(1 + row, [100 + row * 3 + col for col in range(3)], {"highway": "residential"}))
    for col in range(3):
        parts.append(_way(4 + col, [100 + row * 3 + col for row in range(3)], {"highway": "residential"}))
    parts += _square(200, 0.6, 0.2, 0.8, 0.4)
    parts.append(_way(20, _ring(200), {"building": "yes"}))
    parts += _square(210, 0.15, 0.6, 0.35, 0.8)
    parts.append(_way(21, _ring(210), {"natural": "water"}))
    parts += _square(220, 0.55, 0.55, 0.85, 0.85)
    parts.append(_way(22, _ring(220), {}))
    parts += _square(230, 0.65, 0.65, 0.75, 0.75)
    parts.append(_way(23, _ring(230), {}))
    parts.append(
        '<relation id="30"><member type="way" ref="22" role="outer"/>'
        '<member type="way" ref="23" role="inner"/><tag k="landuse" v="grass"/></relation>'
    )
    parts += [_node(240, 0.15, 0.3), _node(241, 0.35, 0.3)]
    parts.append(_way(24, [240, 241], {"railway": "rail"}))
    parts += [_node(250, 0.15, 0.45), _node(251, 0.35, 0.45)]
    parts.append(_way(25, [250, 251], {"highway": "footway"}))
    parts.append('</osm>')
    return "".join(parts)


def _pixel(image, x, y):
    return image.getpixel((round(x * 400), round(400 - y * 400)))


def _color_counts(image):
    return {color: count for count, color in image.getcolors(image.width * image.height)}


def test_road_style_functions_follow_the_source_table():
    assert road_metric_width(RoadType.MOTORWAY) == 6.0
    assert road_metric_width(RoadType.FOOTWAY) == 0.0
    assert road_metric_width(RoadType.INVALID) == 1.0
    assert road_color(RoadType.MOTORWAY) == (226, 122, 143)
    assert road_dashes(RoadType.FOOTWAY) == (0.0, (1.0, 2.0))
    for road_type in RoadType:
        if road_type != RoadType.FOOTWAY:
            assert road_dashes(road_type)[1] == ()


def test_render_builds_representation_for_every_valid_road_type():
    render = Render(Model(_map_osm()))
    assert set(render.road_reps) == set(RoadType) - {RoadType.INVALID}
    assert render.road_reps[RoadType.PRIMARY] == RoadRep(
        road_color(RoadType.PRIMARY), road_dashes(RoadType.PRIMARY), road_metric_width(RoadType.PRIMARY)
    )
    assert render.landuse_colors == LANDUSE_COLORS


def test_display_image_size_and_background():
    image = Render(Model(_map_osm())).display(300, 200)
    assert image.size == (300, 200)
    assert image.getpixel((2, 2)) == BACKGROUND_COLOR


def test_display_fills_buildings_and_water():
    image = Render(Model(_map_osm())).display(400, 400)
    assert _pixel(image, 0.7, 0.3) == BUILDING_FILL
    assert _pixel(image, 0.25, 0.7) == WATER_FILL


def test_display_landuse_leaves_inner_ring_empty():
    image = Render(Model(_map_osm())).display(400, 400)
    assert _pixel(image, 0.6, 0.6) == LANDUSE_COLORS[LanduseType.GRASS]
    assert _pixel(image, 0.7, 0.7) == BACKGROUND_COLOR


def test_display_draws_railway():
    image = Render(Model(_map_osm())).display(400, 400)
    column = [image.getpixel((100, row)) for row in range(276, 285)]
    assert RAILWAY_STROKE in column


def test_display_without_path_has_no_markers():
    model = RouteModel(_map_osm())
    counts = _color_counts(Render(model).display(400, 400))
    assert counts.get(START_COLOR, 0) == 0
    assert counts.get(END_COLOR, 0) == 0


def test_display_marks_start_and_end_of_path():
    model = RouteModel(_map_osm())
    RoutePlanner(model, 10, 10, 90, 90).a_star_search()
    assert model.path
    image = Render(model).display(400, 400)
    assert _pixel(image, 0.105, 0.105) == START_COLOR
    assert _pixel(image, 0.905, 0.905) == END_COLOR


@pytest.mark.parametrize("size", [(100, 100), (50, 120)])
def test_display_scales_to_smaller_side(size):
    model = RouteModel(_map_osm())
    RoutePlanner(model, 10, 10, 90, 90).a_star_search()
    image = Render(model).display(*size)
    assert image.size == size
    scale = min(size)
    x = round(0.105 * scale)
    y = round(size[1] - 0.105 * scale)
    assert image.getpixel((x, y)) == START_COLOR