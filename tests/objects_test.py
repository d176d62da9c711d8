import math
import unittest

import numpy as np
from rlbot.utils.structures.game_data_struct import Rotator
from rlbot.utils.structures.game_data_struct import Vector3 as PacketVector3

from gosling.objects import (Matrix3, Vector3, ball_object, boost_object, car_object, game_object,
                             goal_object, side)
from tests.packets import make_packet


class Vector3Tests(unittest.TestCase):

    def test_constructors(self):
        self.assertEqual(Vector3(1, 2, 3), [1, 2, 3])
        self.assertEqual(Vector3((1, 2, 3)), [1, 2, 3])
        self.assertEqual(Vector3(np.array([1.0, 2.0, 3.0])), [1, 2, 3])
        self.assertEqual(Vector3(PacketVector3(4, 5, 6)), [4, 5, 6])
        self.assertEqual(Vector3(Rotator(0.5, 1.0, 1.5)), [0.5, 1.0, 1.5])
        with self.assertRaises(TypeError):
            Vector3(1, 2)

    def test_operators(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        self.assertEqual(a + b, [5, 7, 9])
        self.assertEqual(b - a, [3, 3, 3])
        self.assertEqual(10 - a, [9, 8, 7])
        self.assertEqual(a * 2, [2, 4, 6])
        self.assertEqual(2 * a, [2, 4, 6])
        self.assertEqual(b / 2, [2, 2.5, 3])
        self.assertEqual(-a, [-1, -2, -3])

    def test_linear_algebra(self):
        a = Vector3(3, 4, 0)
        self.assertEqual(a.magnitude(), 5)
        self.assertEqual(a, 5)
        unit, length = a.normalize(True)
        self.assertEqual(length, 5)
        self.assertAlmostEqual(unit.magnitude(), 1.0)
        self.assertEqual(Vector3(0, 0, 0).normalize(), [0, 0, 0])
        self.assertEqual(Vector3(1, 0, 0).cross(Vector3(0, 1, 0)), [0, 0, 1])
        self.assertEqual(Vector3(1, 2, 3).flatten(), [1, 2, 0])
        self.assertAlmostEqual(Vector3(1, 0, 0).angle(Vector3(0, 1, 0)), math.pi / 2)
        self.assertEqual(Vector3(0, 0, 0).dist(Vector3(0, 3, 4)), 5)
        self.assertEqual(Vector3(0, 0, 0).flat_dist(Vector3(0, 3, 4)), 3)

    def test_copy_is_independent(self):
        a = Vector3(1, 2, 3)
        b = a.copy()
        b.x = 10
        self.assertEqual(a.x, 1)


class Matrix3Tests(unittest.TestCase):

    def test_identity_orientation(self):
        orientation = Matrix3(0, 0, 0)
        self.assertEqual(orientation.forward, [1, 0, 0])
        self.assertEqual(orientation.left, [0, 1, 0])
        self.assertEqual(orientation.up, [0, 0, 1])
        self.assertEqual(orientation.right, [0, -1, 0])

    def test_axes_are_orthonormal(self):
        rng = np.random.default_rng(7)
        for pitch, yaw, roll in rng.uniform(-math.pi, math.pi, size=(25, 3)):
            orientation = Matrix3(pitch, yaw, roll)
            self.assertTrue(np.allclose(orientation.array @ orientation.array.T, np.eye(3)))
            self.assertAlmostEqual(orientation.forward.cross(orientation.left).dot(orientation.up), 1.0)

    def test_local_and_world_are_inverses(self):
        orientation = Matrix3(0.3, -1.2, 2.0)
        vector = Vector3(120, -40, 300)
        back = orientation.world(orientation.dot(vector))
        for actual, expected in zip(back, vector):
            self.assertAlmostEqual(actual, expected)

    def test_getitem(self):
        orientation = Matrix3(0, math.pi / 2, 0)
        self.assertEqual(orientation[0], orientation.forward)
        self.assertEqual(orientation[2], orientation.up)

    def test_axes_cannot_drift_from_the_matrix(self):
        orientation = Matrix3(0.4, 1.1, -0.7)
        forward = orientation.forward
        forward.x = 1000
        orientation.left.y = 1000

        self.assertTrue(np.allclose(orientation.array @ orientation.array.T, np.eye(3)))
        self.assertAlmostEqual(orientation.dot(orientation.forward).x, 1.0)
        self.assertAlmostEqual(orientation.left.magnitude(), 1.0)
        with self.assertRaises(ValueError):
            orientation.array[0, 0] = 5.0


class CarObjectTests(unittest.TestCase):

    def setUp(self):
        self.packet = make_packet(teams=(0, 1), locations=[(100, 200, 17), (0, 0, 300)],
                                  yaws=[math.pi / 2, 0.0], boosts=[45, 100])
        car = self.packet.game_cars[0]
        car.is_super_sonic = True
        car.jumped = True
        car.double_jumped = True
        self.packet.game_cars[1].has_wheel_contact = False
        self.packet.game_cars[1].is_demolished = True

    def test_reads_packet_slice(self):
        car = car_object(0, self.packet)
        self.assertEqual(car.index, 0)
        self.assertEqual(car.team, 0)
        self.assertEqual(car.boost, 45)
        self.assertEqual(car.location, [100, 200, 17])
        self.assertTrue(car.supersonic)
        self.assertTrue(car.jumped)
        self.assertTrue(car.doublejumped)
        self.assertFalse(car.airborne)
        self.assertFalse(car.demolished)

        other = car_object(1, self.packet)
        self.assertTrue(other.airborne)
        self.assertTrue(other.demolished)
        self.assertEqual(other.team, 1)

    def test_local_frame(self):
        car = car_object(0, self.packet)
        # facing +y, so a point ahead of the car is +x locally
        ahead = car.local_location(Vector3(100, 1200, 17))
        self.assertAlmostEqual(ahead.x, 1000, places=3)
        self.assertAlmostEqual(ahead.y, 0, places=3)
        self.assertAlmostEqual(car.forward.y, 1.0, places=5)
        self.assertAlmostEqual(car.local(Vector3(-1, 0, 0)).y, 1.0, places=5)

    def test_unfilled_car_defaults(self):
        car = car_object(4)
        self.assertEqual(car.location, [0, 0, 0])
        self.assertEqual(car.boost, 0)
        self.assertEqual(car.forward, [1, 0, 0])

    def test_update_in_place(self):
        car = car_object(0, self.packet)
        self.packet.game_cars[0].boost = 12
        car.update(self.packet)
        self.assertEqual(car.boost, 12)


class StaticObjectTests(unittest.TestCase):

    def test_goals_sit_on_their_team_side(self):
        self.assertEqual(goal_object(0).location, [0, -5120, 320])
        self.assertEqual(goal_object(1).location, [0, 5120, 320])
        self.assertEqual(side(0), -1)
        self.assertEqual(side(1), 1)

    def test_goal_posts_straddle_the_goal(self):
        goal = goal_object(1)
        self.assertEqual(goal.left_post.x, -goal.right_post.x)
        self.assertEqual(goal.left_post.y, goal.location.y)

    def test_boost_pad_takes_packet_state(self):
        packet = make_packet(num_boosts=3)
        pad = boost_object(2, PacketVector3(0, 2816, 70), False)
        self.assertTrue(pad.active)
        self.assertEqual(pad.location, [0, 2816, 70])

        packet.game_boosts[2].is_active = False
        packet.game_boosts[2].timer = 3.5
        pad.update(packet)
        self.assertFalse(pad.active)
        self.assertEqual(pad.timer, 3.5)

        packet.game_boosts[2].is_active = True
        packet.game_boosts[2].timer = 0.0
        pad.update(packet)
        self.assertTrue(pad.active)


class GameObjectTests(unittest.TestCase):

    def test_kickoff_needs_round_active_and_pause(self):
        self.assertTrue(game_object(0, make_packet(kickoff=True)).kickoff)
        self.assertFalse(game_object(0, make_packet(kickoff=True, round_active=False)).kickoff)
        self.assertFalse(game_object(0, make_packet(kickoff=False)).kickoff)

    def test_scoreboard_is_team_relative(self):
        packet = make_packet(seconds=30.0, scores=(3, 1))
        self.assertEqual(game_object(0, packet).friend_score, 3)
        self.assertEqual(game_object(1, packet).friend_score, 1)
        self.assertEqual(game_object(1, packet).foe_score, 3)
        self.assertEqual(game_object(0, packet).time, 30.0)
        self.assertEqual(game_object(0, packet).time_remaining, 270.0)

    def test_ball_reads_latest_touch(self):
        packet = make_packet(ball_location=(0, 1000, 93))
        packet.game_ball.latest_touch.time_seconds = 4.5
        packet.game_ball.latest_touch.team = 1
        ball = ball_object(packet)
        self.assertEqual(ball.location, [0, 1000, 93])
        self.assertEqual(ball.latest_touched_time, 4.5)
        self.assertEqual(ball.latest_touched_team, 1)


if __name__ == '__main__':
    unittest.main()
