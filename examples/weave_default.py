"""Example pipeline: weave a web and inspect each stage."""

from orbweaver import SegmentRole, WeaveParams, angular_gaps, generate, generate_tikz_document

PARAMS = WeaveParams(max_gap_degrees=30.0, min_clearance_factor=0.25, ring_count=5, cap_capacity=2)


def main() -> None:
    geometry = generate(800, 600, PARAMS, seed=42)

    print(f"Hub: {geometry.hub.as_tuple()}")
    print("Frame:")
    for role in (SegmentRole.BRIDGE, SegmentRole.ANCHOR_A, SegmentRole.ANCHOR_B):
        (segment,) = geometry.segments_by_role(role)
        print(f"  {role.value}: {segment.start.as_tuple()} -> {segment.end.as_tuple()} (len={segment.length:.2f})")

    print(f"Spokes ({len(geometry.spokes)}):")
    for spoke in geometry.spokes:
        print(f"  {spoke.angle:7.2f} deg  len={spoke.length:7.2f}  aux marks={len(spoke.aux_points)}")
    print(f"  max gap: {angular_gaps(geometry.spokes).max():.3f} deg")

    print("Placement:")
    for i, event in enumerate(geometry.placement_events):
        print(
            f"  [{i}] angle={event.angle:.2f} gap={event.gap:.2f} "
            f"clearance=({event.left_clearance:.2f}, {event.right_clearance:.2f}) tries={event.attempts}"
        )

    aux = geometry.aux_trace
    print(f"Auxiliary spiral: {len(aux.segments)} step(s), direction={aux.direction:+d}, ends on spoke {aux.terminal_index}")
    capture = geometry.capture_trace
    print(f"Capture spiral: {len(capture.segments)} segment(s) over {capture.levels} level(s)")

    print(generate_tikz_document(geometry, caption="seed 42"))


if __name__ == "__main__":
    main()
