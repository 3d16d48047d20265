"""Unit tests for sphere intersection.

Tests cover:
- Ray-sphere intersection (hit, miss, tangent, from inside)
- Interval handling (closed bounds, far-root fallback, t_max rejection)
- Hit record face orientation
"""

import math

import pytest
import taichi as ti


def _make_sphere_query():
    """Build a kernel that intersects one ray with one sphere.

    Returns:
        A function (origin, direction, center, radius, t_min, t_max) -> dict
        with the fields of the resulting HitRecord.
    """
    from raycaster.core.ray import Ray, vec3
    from raycaster.geometry.sphere import Sphere, hit_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f64, shape=())
    point = ti.Vector.field(3, dtype=ti.f64, shape=())
    normal = ti.Vector.field(3, dtype=ti.f64, shape=())
    front_face = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def query_kernel(
        origin: vec3, direction: vec3, center: vec3, radius: ti.f64, t_min: ti.f64, t_max: ti.f64
    ):
        ray = Ray(origin=origin, direction=direction)
        sphere = Sphere(center=center, radius=radius)
        rec = hit_sphere(ray, sphere, t_min, t_max)
        hit[None] = rec.hit
        t_val[None] = rec.t
        point[None] = rec.point
        normal[None] = rec.normal
        front_face[None] = rec.front_face

    def query(origin, direction, center, radius, t_min=0.0, t_max=math.inf):
        query_kernel(
            vec3(*origin), vec3(*direction), vec3(*center), radius, t_min, t_max
        )
        return {
            "hit": hit[None],
            "t": t_val[None],
            "point": tuple(point[None]),
            "normal": tuple(normal[None]),
            "front_face": front_face[None],
        }

    return query


class TestSphereHits:
    """Tests for basic ray-sphere hits and misses."""

    def test_direct_hit(self):
        """Test a ray aimed at the sphere center hits the near surface."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(4.0)
        assert rec["point"] == pytest.approx((0.0, 0.0, -4.0))
        assert rec["normal"] == pytest.approx((0.0, 0.0, 1.0))
        assert rec["front_face"] == 1

    def test_miss(self):
        """Test a ray passing beside the sphere misses."""
        query = _make_sphere_query()
        rec = query((0.0, 2.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert rec["hit"] == 0

    def test_ray_pointing_away(self):
        """Test a sphere behind the ray origin is not hit."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, -5.0), 1.0)
        assert rec["hit"] == 0

    def test_hit_from_inside(self):
        """Test a ray starting inside the sphere hits the back face."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 2.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(2.0)
        assert rec["front_face"] == 0
        # Outward normal is (0, 0, -1); stored normal opposes the ray
        assert rec["normal"] == pytest.approx((0.0, 0.0, 1.0))

    def test_tangent_ray(self):
        """Test a ray grazing the sphere reports the tangent point."""
        query = _make_sphere_query()
        rec = query((1.0, 0.0, -10.0), (0.0, 0.0, 1.0), (0.0, 0.0, -5.0), 1.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(5.0)
        assert rec["point"] == pytest.approx((1.0, 0.0, -5.0))
        # Direction is perpendicular to the outward normal, so not front facing
        assert rec["front_face"] == 0

    def test_unnormalized_direction(self):
        """Test t is a parameter of the ray as given, not a distance."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -2.0), (0.0, 0.0, -5.0), 1.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(2.0)
        assert rec["point"] == pytest.approx((0.0, 0.0, -4.0))
        assert rec["normal"] == pytest.approx((0.0, 0.0, 1.0))

    def test_off_axis_hit_on_surface(self):
        """Test the hit point lies on the sphere surface."""
        query = _make_sphere_query()
        center = (0.3, -0.2, -3.0)
        radius = 0.75
        rec = query((0.0, 0.0, 0.0), (0.1, 0.05, -1.0), center, radius)

        assert rec["hit"] == 1
        dist = math.dist(rec["point"], center)
        assert dist == pytest.approx(radius, rel=1e-9)
        n_len = math.sqrt(sum(c * c for c in rec["normal"]))
        assert n_len == pytest.approx(1.0, rel=1e-9)


    def test_make_sphere(self):
        """Test make_sphere builds a sphere usable by hit_sphere."""
        from raycaster.core.ray import Ray, vec3
        from raycaster.geometry.sphere import hit_sphere, make_sphere

        center = ti.Vector.field(3, dtype=ti.f64, shape=())
        radius = ti.field(dtype=ti.f64, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, -3.0), 0.25)
            center[None] = sphere.center
            radius[None] = sphere.radius
            ray = Ray(origin=vec3(1.0, 2.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
            t_val[None] = hit_sphere(ray, sphere, 0.0, 10.0).t

        test_kernel()
        assert tuple(center[None]) == (1.0, 2.0, -3.0)
        assert radius[None] == 0.25
        assert t_val[None] == pytest.approx(2.75)


class TestSphereInterval:
    """Tests for [t_min, t_max] interval handling."""

    def test_far_root_when_near_root_below_t_min(self):
        """Test the far root is used when the near root is below t_min."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0, t_min=4.5)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(6.0)
        assert rec["point"] == pytest.approx((0.0, 0.0, -6.0))
        assert rec["front_face"] == 0
        assert rec["normal"] == pytest.approx((0.0, 0.0, 1.0))

    def test_rejected_beyond_t_max(self):
        """Test a hit farther than t_max is rejected."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0, t_max=3.0)
        assert rec["hit"] == 0

    def test_both_roots_outside_interval(self):
        """Test a miss when both roots lie outside the interval."""
        query = _make_sphere_query()
        rec = query(
            (0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0, t_min=4.5, t_max=5.5
        )
        assert rec["hit"] == 0

    def test_t_min_is_inclusive(self):
        """Test a root exactly at t_min is accepted."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0, t_min=4.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(4.0)

    def test_t_max_is_inclusive(self):
        """Test a root exactly at t_max is accepted."""
        query = _make_sphere_query()
        rec = query((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0, t_max=4.0)

        assert rec["hit"] == 1
        assert rec["t"] == pytest.approx(4.0)


class TestFaceOrientation:
    """Tests for normal orientation against the incoming ray."""

    @pytest.mark.parametrize(
        "origin,direction",
        [
            ((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)),
            ((0.0, 0.0, -5.0), (1.0, 0.3, 0.2)),
            ((3.0, 3.0, -5.0), (-1.0, -1.0, 0.0)),
            ((0.0, -4.0, -5.0), (0.0, 1.0, 0.0)),
            ((0.2, 0.1, -4.9), (0.0, 0.0, -1.0)),
        ],
    )
    def test_normal_opposes_ray(self, origin, direction):
        """Test the stored normal never points along the ray."""
        query = _make_sphere_query()
        rec = query(origin, direction, (0.0, 0.0, -5.0), 1.0)

        assert rec["hit"] == 1
        d_dot_n = sum(d * n for d, n in zip(direction, rec["normal"]))
        assert d_dot_n <= 0.0

    def test_make_hit_record_face_rule(self):
        """Test make_hit_record flips the normal for rays leaving the surface."""
        from raycaster.core.ray import Ray, vec3
        from raycaster.geometry.hittable import make_hit_record

        normals = ti.Vector.field(3, dtype=ti.f64, shape=2)
        faces = ti.field(dtype=ti.i32, shape=2)
        hits = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            outward = vec3(0.0, 1.0, 0.0)
            point = vec3(0.0, 0.0, 0.0)
            entering = Ray(origin=vec3(0.0, 1.0, 0.0), direction=vec3(0.0, -1.0, 0.0))
            leaving = Ray(origin=vec3(0.0, -1.0, 0.0), direction=vec3(0.0, 1.0, 0.0))
            rec_in = make_hit_record(entering, 1.0, point, outward)
            rec_out = make_hit_record(leaving, 1.0, point, outward)
            normals[0] = rec_in.normal
            normals[1] = rec_out.normal
            faces[0] = rec_in.front_face
            faces[1] = rec_out.front_face
            hits[0] = rec_in.hit
            hits[1] = rec_out.hit

        test_kernel()
        assert hits[0] == 1 and hits[1] == 1
        assert faces[0] == 1
        assert tuple(normals[0]) == pytest.approx((0.0, 1.0, 0.0))
        assert faces[1] == 0
        assert tuple(normals[1]) == pytest.approx((0.0, -1.0, 0.0))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
