"""
Unit tests for particle creation and per-frame updates.
"""

import numpy as np
import pygame
import pytest

from config import NetworkConfig
from constants import DEFAULT_PALETTE
from particle import ParticleMarker, ParticleSystem


def make_system(positions, velocities):
    positions = np.array(positions, dtype=np.float64)
    velocities = np.array(velocities, dtype=np.float64)
    count = len(positions)
    markers = [ParticleMarker(2.0, pygame.Color("white"), 0.5) for _ in range(count)]
    return ParticleSystem(
        positions, velocities,
        sizes=np.full(count, 2.0), opacities=np.full(count, 0.5),
        colors=[pygame.Color("white")] * count, markers=markers,
    )


class TestCreate:
    def test_creates_one_marker_per_particle(self, host, rng):
        particles = ParticleSystem.create(host, (800, 600), NetworkConfig(), rng=rng)
        assert len(particles) == 40
        assert particles.positions.shape == (40, 2)
        assert particles.velocities.shape == (40, 2)
        assert len(particles.markers) == 40
        assert host.children == particles.markers

    def test_attributes_drawn_from_configured_ranges(self, host, rng):
        config = NetworkConfig(particle_count=200)
        particles = ParticleSystem.create(host, (800, 600), config, rng=rng)
        assert np.all((particles.sizes >= 2.0) & (particles.sizes <= 4.0))
        assert np.all((particles.opacities >= 0.3) & (particles.opacities <= 0.7))
        assert np.all(np.abs(particles.velocities) <= 0.35)
        assert np.all((particles.positions[:, 0] >= 0) & (particles.positions[:, 0] <= 800))
        assert np.all((particles.positions[:, 1] >= 0) & (particles.positions[:, 1] <= 600))
        palette = [pygame.Color(c) for c in DEFAULT_PALETTE]
        assert all(color in palette for color in particles.colors)

    def test_markers_start_at_particle_positions(self, host, rng):
        particles = ParticleSystem.create(host, (800, 600), NetworkConfig(particle_count=5), rng=rng)
        for marker, (x, y) in zip(particles.markers, particles.positions):
            assert marker.left == x
            assert marker.top == y

    def test_same_seed_gives_same_particles(self, host):
        config = NetworkConfig(seed=7)
        a = ParticleSystem.create(host, (800, 600), config)
        b = ParticleSystem.create(host, (800, 600), config)
        np.testing.assert_array_equal(a.positions, b.positions)
        np.testing.assert_array_equal(a.velocities, b.velocities)

    def test_zero_sized_surface_collapses_positions(self, host, rng):
        particles = ParticleSystem.create(host, (0, 0), NetworkConfig(particle_count=10), rng=rng)
        assert np.all(particles.positions == 0.0)
        particles.update((0, 0))
        assert np.all(np.isfinite(particles.positions))

    def test_unparseable_palette_falls_back_to_default(self, host, rng):
        config = NetworkConfig(particle_count=10, colors=("not-a-color",))
        particles = ParticleSystem.create(host, (800, 600), config, rng=rng)
        palette = [pygame.Color(c) for c in DEFAULT_PALETTE]
        assert all(color in palette for color in particles.colors)

    def test_zero_particles(self, host, rng):
        particles = ParticleSystem.create(host, (800, 600), NetworkConfig(particle_count=0), rng=rng)
        assert len(particles) == 0
        particles.update((800, 600))
        assert host.children == []


class TestUpdate:
    def test_overshoot_then_reflect(self):
        particles = make_system([[99.0, 50.0]], [[5.0, 0.0]])
        particles.update((100, 100))
        assert particles.positions[0, 0] == pytest.approx(104.0)
        assert particles.velocities[0, 0] == pytest.approx(-5.0)

        particles.update((100, 100))
        assert particles.positions[0, 0] == pytest.approx(99.0)
        assert particles.velocities[0, 0] == pytest.approx(-5.0)

    def test_no_preemptive_flip_inside_bounds(self):
        particles = make_system([[95.0, 50.0]], [[5.0, 0.0]])
        particles.update((100, 100))
        # Exactly on the bound is still inside.
        assert particles.positions[0, 0] == pytest.approx(100.0)
        assert particles.velocities[0, 0] == pytest.approx(5.0)

    def test_axes_reflect_independently(self):
        particles = make_system([[50.0, 1.0]], [[2.0, -3.0]])
        particles.update((100, 100))
        assert particles.velocities[0, 0] == pytest.approx(2.0)
        assert particles.velocities[0, 1] == pytest.approx(3.0)
        assert particles.positions[0, 1] == pytest.approx(-2.0)

    def test_positions_stay_within_one_step_of_bounds(self, host, rng):
        config = NetworkConfig(particle_count=40, speed=8.0)
        particles = ParticleSystem.create(host, (800, 600), config, rng=rng)
        max_step = config.speed / 2
        for _ in range(2000):
            particles.update((800, 600))
            x, y = particles.positions[:, 0], particles.positions[:, 1]
            assert np.all((x >= -max_step) & (x <= 800 + max_step))
            assert np.all((y >= -max_step) & (y <= 600 + max_step))

    def test_speed_is_preserved(self, host, rng):
        particles = ParticleSystem.create(host, (800, 600), NetworkConfig(), rng=rng)
        before = np.abs(particles.velocities).copy()
        for _ in range(500):
            particles.update((800, 600))
        np.testing.assert_allclose(np.abs(particles.velocities), before)

    def test_markers_follow_positions(self):
        particles = make_system([[10.0, 20.0], [30.0, 40.0]], [[1.0, 1.0], [-1.0, 0.5]])
        particles.update((100, 100))
        assert (particles.markers[0].left, particles.markers[0].top) == (11.0, 21.0)
        assert (particles.markers[1].left, particles.markers[1].top) == (29.0, 40.5)

    def test_particle_snapshot(self):
        particles = make_system([[10.0, 20.0]], [[1.0, -1.0]])
        snapshot = particles.particle(0)
        assert snapshot.position == (10.0, 20.0)
        assert snapshot.velocity == (1.0, -1.0)
        assert snapshot.size == 2.0
        assert snapshot.opacity == 0.5
        assert snapshot.marker is particles.markers[0]


class TestMarker:
    def test_marker_draws_at_left_top(self):
        marker = ParticleMarker(3.0, pygame.Color("#6366f1"), 1.0)
        marker.move_to(50.0, 40.0)
        target = pygame.Surface((100, 100), pygame.SRCALPHA)
        target.fill((0, 0, 0, 0))
        marker.draw(target, (0, 0))
        # The dot is centered inside the glow, one glow radius past left/top.
        assert target.get_at((51, 41)).a > 0
        assert target.get_at((10, 10)).a == 0

    def test_remove_markers(self, host, rng):
        particles = ParticleSystem.create(host, (800, 600), NetworkConfig(particle_count=3), rng=rng)
        particles.remove_markers(host)
        assert host.children == []
