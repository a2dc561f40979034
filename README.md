# planmon

planmon holds two separate tools:

* **Route planning.** It loads an OpenStreetMap (`.osm`) extract and runs an
  A\* search between two points on the map's road network. It reports the
  route length in metres. It can also draw the map with the route on it to a
  PNG image.
* **System monitor.** It is a curses dashboard for Linux. It shows the
  operating system, the kernel, CPU and memory use, process counts, uptime and
  the busiest processes. It reads these from `/proc`, `/etc/os-release` and
  `/etc/passwd`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Route planning

```
planmon-route -f map.osm
planmon-route -f map.osm -o route.png
```

Options:

* `-f FILE`: the OSM file to load.
* `-o FILE`: after the search, draw the map and the route to a 400×400 image
  and save it to this file.

If you give no arguments at all, the command prints a usage hint and reads
`../map.osm`. If you give arguments but no `-f`, it has no map to read and
stops with an error.

When the map is loaded, the command reads four numbers from standard input:
`start_x start_y end_x end_y`. Each is a percentage (0–100) of the map's
extent, with the origin at the bottom-left corner. For example:

```
echo "10 10 90 90" | planmon-route -f map.osm
```

The start and end snap to the nearest road nodes, and footways are not used
for this. The command then searches for a route and prints its length:

```
Distance: 873.416 meters. 
```

If the map cannot be parsed, has no `bounds` element, or fewer than four
numbers are given, the command writes `Error: ...` to standard error and exits
with status 1. If no route is found, the distance printed is 0.

### As a library

```python
from planmon.route_cli import read_file
from planmon.route_model import RouteModel
from planmon.route_planner import RoutePlanner
from planmon.render import Render

model = RouteModel(read_file("map.osm"))
planner = RoutePlanner(model, 10, 10, 90, 90)
path = planner.a_star_search()      # also stored as model.path
print(planner.distance)             # metres

image = Render(model).display(400, 400)   # a Pillow RGB image
image.save("route.png")
```

`read_file(path)` returns the file's bytes. It returns `None` if the file
cannot be read or is empty.

`planmon.model.Model(xml)` parses an OSM document, given as bytes or text, into
these lists:

* `nodes`
* `ways`
* `roads` (each with a `RoadType`)
* `railways`
* `buildings`
* `leisures`
* `waters`
* `landuses` (each with a `LanduseType`)

Node coordinates are projected to metres and shifted to the map's lower-left
corner. They are then divided by `metric_scale`, which is the shorter side of
the bounds, so that side spans 0 to 1. Water and land-use relations that are
made of open ways are stitched into closed rings. Roads are sorted by type. A
document that cannot be parsed, or that has no bounds, raises `ValueError`.

`planmon.route_model.RouteModel` extends `Model`. It adds:

* `route_nodes`: one `RouteNode` per node, holding the search state `parent`,
  `g_value`, `h_value`, `visited` and `neighbors`.
* `find_closest_node(x, y)`: the nearest node on a non-footway road. It raises
  `ValueError` if the map has no such node.

`planmon.route_planner.RoutePlanner` exposes the steps of the search:

* `calculate_h_value`
* `add_neighbors`
* `next_node`
* `construct_final_path`
* `a_star_search`

`planmon.render.Render(model).display(width, height)` draws the map layers in
this order:

1. land use
2. leisure
3. water
4. railways
5. roads
6. buildings
7. the path, with green (start) and red (end) markers

The road styles are available from `road_color`, `road_metric_width` and
`road_dashes`.

The route tools draw to image files only. They do not open a window and have
no interactive map view.

## System monitor

```
planmon-monitor
```

The top window shows:

* the OS name and kernel release
* CPU and memory use as 50-segment bars
* the total and running process counts
* uptime as `H:M:S`

The lower window lists the ten processes with the highest CPU use. Its columns
are PID, user, CPU %, RAM in MB, the process's start-time field formatted as
`H:M:S`, and the command. The display refreshes once a second. Press Ctrl+C to
quit.

The pieces can also be used on their own:

* `planmon.linux_parser.LinuxParser(proc_dir, os_release_path, passwd_path)`
  reads the values. Every path has a default (`/proc`, `/etc/os-release`,
  `/etc/passwd`), so it can also be pointed at copies of those files.
* `planmon.processor.Processor` gives CPU utilization since the previous
  reading.
* `planmon.process.Process` is a snapshot of one process. Processes sort with
  the highest CPU use first.
* `planmon.system.System` gathers the figures for the whole machine.
* `planmon.format.elapsed_time` and `planmon.monitor_display.progress_bar`
  format values for display.