import math

import numpy as np
import rlbot.utils.structures.game_data_struct as game_data_struct

# This file holds the world model used by GoslingAgent: the vector/matrix math
# plus the objects that turn a GameTickPacket into something friendlier to use.


def side(team):
    # returns -1 for blue team and 1 for orange team
    return -1 if team == 0 else 1


class Vector3:
    # The Vector3 makes it easy to store positions, velocities, etc and perform vector math
    # A Vector3 can be created with:
    # - Anything that has a __getitem__ (lists, tuples, numpy arrays, Vector3's, etc)
    # - 3 numbers
    # - A gametickpacket Vector3 or Rotator
    def __init__(self, *args):
        if len(args) == 3:
            self.data = [float(value) for value in args]
        elif len(args) == 1 and isinstance(args[0], game_data_struct.Vector3):
            self.data = [args[0].x, args[0].y, args[0].z]
        elif len(args) == 1 and isinstance(args[0], game_data_struct.Rotator):
            self.data = [args[0].pitch, args[0].yaw, args[0].roll]
        elif len(args) == 1 and hasattr(args[0], "__getitem__"):
            self.data = [float(value) for value in args[0]]
        else:
            raise TypeError("Vector3 unable to accept %s" % (args,))

    @property
    def x(self):
        return self.data[0]

    @x.setter
    def x(self, value):
        self.data[0] = value

    @property
    def y(self):
        return self.data[1]

    @y.setter
    def y(self, value):
        self.data[1] = value

    @property
    def z(self):
        return self.data[2]

    @z.setter
    def z(self, value):
        self.data[2] = value

    def __getitem__(self, key):
        return self.data[key]

    def __setitem__(self, key, value):
        self.data[key] = value

    def __len__(self):
        return 3

    def __iter__(self):
        return iter(self.data)

    def __str__(self):
        return str(self.data)

    def __repr__(self):
        return "Vector3(%s, %s, %s)" % tuple(self.data)

    def __eq__(self, value):
        # Vector3's can be compared with:
        # - Another Vector3 or a list/tuple, in which case the values must match
        # - A single value, in which case the Vector's length must match the value
        if isinstance(value, Vector3):
            return self.data == value.data
        if isinstance(value, (list, tuple)):
            return self.data == list(value)
        return self.magnitude() == value

    __hash__ = None

    # Operators work per dimension with another Vector3, or apply a single value to every dimension
    def __add__(self, value):
        if hasattr(value, "__getitem__"):
            return Vector3(self[0] + value[0], self[1] + value[1], self[2] + value[2])
        return Vector3(self[0] + value, self[1] + value, self[2] + value)
    __radd__ = __add__

    def __sub__(self, value):
        if hasattr(value, "__getitem__"):
            return Vector3(self[0] - value[0], self[1] - value[1], self[2] - value[2])
        return Vector3(self[0] - value, self[1] - value, self[2] - value)

    def __rsub__(self, value):
        return -self + value

    def __neg__(self):
        return Vector3(-self[0], -self[1], -self[2])

    def __mul__(self, value):
        if hasattr(value, "__getitem__"):
            return Vector3(self[0] * value[0], self[1] * value[1], self[2] * value[2])
        return Vector3(self[0] * value, self[1] * value, self[2] * value)
    __rmul__ = __mul__

    def __truediv__(self, value):
        if hasattr(value, "__getitem__"):
            return Vector3(self[0] / value[0], self[1] / value[1], self[2] / value[2])
        return Vector3(self[0] / value, self[1] / value, self[2] / value)

    def magnitude(self):
        return math.sqrt(self.dot(self))

    def normalize(self, return_magnitude=False):
        # Returns a Vector3 that shares the same direction but has a length of 1.0
        # normalize(True) also returns the length, which saves computing it twice
        magnitude = self.magnitude()
        if magnitude != 0:
            unit = Vector3(self[0] / magnitude, self[1] / magnitude, self[2] / magnitude)
        else:
            unit = Vector3(0, 0, 0)
        if return_magnitude:
            return unit, magnitude
        return unit

    def dot(self, value):
        return self[0] * value[0] + self[1] * value[1] + self[2] * value[2]

    def cross(self, value):
        return Vector3((self[1] * value[2]) - (self[2] * value[1]),
                       (self[2] * value[0]) - (self[0] * value[2]),
                       (self[0] * value[1]) - (self[1] * value[0]))

    def flatten(self):
        # Sets Z (Vector3[2]) to 0
        return Vector3(self[0], self[1], 0)

    def render(self):
        # x and y only, for 2D drawing
        return [self[0], self[1]]

    def copy(self):
        return Vector3(self.data[:])

    def angle(self, value):
        # 2D angle between this Vector3 and another Vector3, in radians
        return math.acos(cap_unit(self.flatten().normalize().dot(value.flatten().normalize())))

    def angle3D(self, value):
        return math.acos(cap_unit(self.normalize().dot(Vector3(value).normalize())))

    def dist(self, value):
        return (self - value).magnitude()

    def flat_dist(self, value):
        return (self - value).flatten().magnitude()


def cap_unit(value):
    # keeps rounding error from pushing a cosine outside acos' domain
    return max(min(value, 1.0), -1.0)


class Matrix3:
    # The Matrix3's sole purpose is to convert roll, pitch, and yaw data from the gametickpacket into an orientation matrix
    # Matrix3[0] is the "forward" direction of a given car
    # Matrix3[1] is the "left" direction of a given car
    # Matrix3[2] is the "up" direction of a given car
    # If you have a distance between the car and some object, ie ball.location - car.location,
    # you can convert that to local coordinates by dotting it with this matrix
    # ie: local_ball_location = Matrix3.dot(ball.location - car.location)
    def __init__(self, pitch=0.0, yaw=0.0, roll=0.0):
        CP = math.cos(pitch)
        SP = math.sin(pitch)
        CY = math.cos(yaw)
        SY = math.sin(yaw)
        CR = math.cos(roll)
        SR = math.sin(roll)
        self.array = np.array([
            [CP * CY, CP * SY, SP],
            [CY * SP * SR - CR * SY, SY * SP * SR + CR * CY, -CP * SR],
            [-CR * CY * SP - SR * SY, -CR * SY * SP + SR * CY, CP * CR],
        ])
        # forward/left/up are built from these rows on every access
        self.array.flags.writeable = False

    @classmethod
    def from_rotator(cls, rotator):
        return cls(rotator.pitch, rotator.yaw, rotator.roll)

    @property
    def forward(self):
        return Vector3(self.array[0])

    @property
    def left(self):
        return Vector3(self.array[1])

    @property
    def up(self):
        return Vector3(self.array[2])

    @property
    def right(self):
        return -self.left

    def __getitem__(self, key):
        return Vector3(self.array[key])

    def dot(self, vector):
        # world -> local
        return Vector3(self.array @ np.asarray(list(vector), dtype=float))

    def world(self, vector):
        # local -> world, the transpose of an orthonormal matrix is its inverse
        return Vector3(self.array.T @ np.asarray(list(vector), dtype=float))


class world_object:
    # Everything that moves (and the pads that don't) shares a location and a local frame
    def __init__(self):
        self.location = Vector3(0, 0, 0)
        self.orientation = Matrix3()
        self.velocity = Vector3(0, 0, 0)
        self.angular_velocity = Vector3(0, 0, 0)

    def read_physics(self, physics):
        self.location = Vector3(physics.location)
        self.velocity = Vector3(physics.velocity)
        self.orientation = Matrix3.from_rotator(physics.rotation)
        self.angular_velocity = Vector3(physics.angular_velocity)

    def local(self, value):
        # Shorthand for self.orientation.dot(value)
        return self.orientation.dot(value)

    def local_location(self, location):
        # How far a point is forwards (+x), to the left (+y) and upwards (+z) of this object
        return self.local(location - self.location)

    def local_velocity(self, velocity=None):
        if velocity is None:
            velocity = self.velocity
        return self.local(velocity)

    @property
    def forward(self):
        return self.orientation.forward

    @property
    def left(self):
        return self.orientation.left

    @property
    def right(self):
        return self.orientation.right

    @property
    def up(self):
        return self.orientation.up


class car_object(world_object):
    # The car_object, and kin, convert the gametickpacket in something a little friendlier to use,
    # and are updated by GoslingAgent as the game runs
    def __init__(self, index, packet=None):
        super().__init__()
        self.index = index
        self.team = 0
        self.name = ""
        self.boost = 0
        self.demolished = False
        self.airborne = False
        self.supersonic = False
        self.jumped = False
        self.doublejumped = False
        if packet is not None:
            self.update(packet)

    def update(self, packet):
        car = packet.game_cars[self.index]
        self.read_physics(car.physics)
        # angular velocity is kept in local coordinates, which is what the PD loops want
        self.angular_velocity = self.local(self.angular_velocity)
        self.team = car.team
        self.name = car.name
        self.boost = car.boost
        self.demolished = car.is_demolished
        self.airborne = not car.has_wheel_contact
        self.supersonic = car.is_super_sonic
        self.jumped = car.jumped
        self.doublejumped = car.double_jumped


class ball_object(world_object):
    def __init__(self, packet=None):
        super().__init__()
        self.latest_touched_time = 0.0
        self.latest_touched_team = 0
        if packet is not None:
            self.update(packet)

    def update(self, packet):
        ball = packet.game_ball
        self.read_physics(ball.physics)
        self.latest_touched_time = ball.latest_touch.time_seconds
        self.latest_touched_team = ball.latest_touch.team


class boost_object:
    # Pads never move; only their active flag and respawn timer come from the packet
    def __init__(self, index, location, large):
        self.index = index
        self.location = Vector3(location)
        self.large = large
        self.active = True
        self.timer = 0.0

    def update(self, packet):
        pad = packet.game_boosts[self.index]
        self.active = pad.is_active
        self.timer = pad.timer


class goal_object:
    # Creates/holds goalpost locations for a given team (soccar on standard maps only)
    def __init__(self, team):
        self.team = team
        team = side(team)
        self.location = Vector3(0, team * 5120, 320)  # center of goal line
        # Posts are closer to x=893, but this allows the bot to be a little more accurate
        self.left_post = Vector3(team * 800, team * 5120, 320)
        self.right_post = Vector3(-team * 800, team * 5120, 320)


class game_object:
    # This object holds information about the current match
    def __init__(self, team, packet=None):
        self.team = team
        self.time = 0.0
        self.time_remaining = 0.0
        self.overtime = False
        self.round_active = False
        self.kickoff_pause = False
        self.match_ended = False
        self.friend_score = 0
        self.foe_score = 0
        if packet is not None:
            self.update(packet)

    def update(self, packet):
        game = packet.game_info
        self.time = game.seconds_elapsed
        self.time_remaining = game.game_time_remaining
        self.overtime = game.is_overtime
        self.round_active = game.is_round_active
        self.kickoff_pause = game.is_kickoff_pause
        self.match_ended = game.is_match_ended
        if packet.num_teams > 1:
            self.friend_score = packet.teams[self.team].score
            self.foe_score = packet.teams[1 - self.team].score

    @property
    def kickoff(self):
        return self.round_active and self.kickoff_pause
