import time

from rlbot.agents.base_agent import BaseAgent, SimpleControllerState, BOT_CONFIG_AGENT_HEADER
from rlbot.parsing.custom_config import ConfigHeader, ConfigObject
from rlbot.utils.structures.game_data_struct import GameTickPacket

from gosling.errors import PacketError
from gosling.objects import ball_object, boost_object, car_object, game_object, goal_object
from gosling.stack import RoutineStack

# rlbot runs bots at 120 ticks per second
DEFAULT_TICK_BUDGET = 1 / 120


class GoslingAgent(BaseAgent):
    """Holds/updates information about the game and runs routines.

    Every tick ``get_output`` refreshes the world model from the packet, lets
    ``run()`` decide what goes on the stack, then runs the routine on top of
    the stack against a fresh controller. Subclasses only override ``run()``.
    """

    def __init__(self, name, team, index):
        super().__init__(name, team, index)
        # loaded from the bot config, see create_agent_configurations
        self.debugging = False
        self.tick_budget = DEFAULT_TICK_BUDGET

        # A list of cars for both teammates and opponents
        self.friends = []
        self.foes = []
        # This holds the car_object for our agent
        self.me = car_object(self.index)

        self.ball = ball_object()
        self.game = game_object(self.team)
        # A list of boosts, filled once by get_ready()
        self.boosts = []
        # goals
        self.friend_goal = goal_object(self.team)
        self.foe_goal = goal_object(1 - self.team)

        self.stack = RoutineStack()
        # Game time
        self.time = 0.0
        self.tick = 0
        # Whether or not get_ready() has run
        self.ready = False
        # the controller that is returned to the framework after every tick
        self.controller = SimpleControllerState()
        # a flag that tells us when kickoff is happening
        self.kickoff_flag = False

    @staticmethod
    def create_agent_configurations(config: ConfigObject):
        params = config.get_header(BOT_CONFIG_AGENT_HEADER)
        params.add_value("debugging", bool, default=False,
                         description="Draw the routine stack and routine target lines")
        params.add_value("tick_budget", float, default=DEFAULT_TICK_BUDGET,
                         description="Seconds a tick may take before a warning is logged")

    def load_config(self, config_header: ConfigHeader):
        self.debugging = config_header.getboolean("debugging")
        self.tick_budget = config_header.getfloat("tick_budget")

    def get_ready(self, packet: GameTickPacket):
        # Preps all of the objects that will be updated during play
        if self.ready:
            return
        # rosters first: a packet without our car raises before anything is kept
        self.refresh_player_lists(packet)
        field_info = self.get_field_info()
        pads = field_info.boost_pads
        self.boosts = [boost_object(i, pads[i].location, pads[i].is_full_boost) for i in range(field_info.num_boosts)]
        self.ball = ball_object(packet)
        self.ready = True
        self.logger.info(f"{self.name} ready with {len(self.boosts)} boost pads and {packet.num_cars} cars")

    def refresh_player_lists(self, packet: GameTickPacket):
        # makes new friend/foe lists
        # Useful to keep separate from get_ready because humans can join/leave a match
        if not 0 <= self.index < packet.num_cars:
            raise PacketError(f"Car index {self.index} is missing from a packet with {packet.num_cars} cars",
                              self.index, packet.num_cars)
        self.friends = [car_object(i, packet) for i in range(packet.num_cars)
                        if packet.game_cars[i].team == self.team and i != self.index]
        self.foes = [car_object(i, packet) for i in range(packet.num_cars)
                     if packet.game_cars[i].team != self.team and i != self.index]
        self.me = car_object(self.index, packet)
        self.logger.debug(f"Rebuilt rosters: {len(self.friends)} friends, {len(self.foes)} foes")

    def push(self, routine):
        # Shorthand for adding a routine to the stack
        self.stack.push(routine)

    def pop(self):
        # Shorthand for removing a routine from the stack, returns the routine
        return self.stack.pop()

    def clear(self):
        # Shorthand for clearing the stack of all routines
        self.stack.clear()

    @property
    def rendering(self):
        return self.debugging and getattr(self, "renderer", None) is not None

    def line(self, start, end, color=None):
        if not self.rendering:
            return
        color = color if color is not None else [255, 255, 255]
        self.renderer.draw_line_3d(start.copy(), end.copy(), self.renderer.create_color(255, *color))

    def debug_stack(self):
        # Draws the stack on the screen, top of the stack first
        if not self.rendering:
            return
        white = self.renderer.white()
        names = self.stack.names()
        for i in range(len(names) - 1, -1, -1):
            self.renderer.draw_string_2d(10, 50 + (50 * (len(names) - i)), 3, 3, names[i], white)

    def preprocess(self, packet: GameTickPacket):
        # Calling the update functions for all of the objects
        if packet.num_cars != len(self.friends) + len(self.foes) + 1:
            self.refresh_player_lists(packet)
        for car in self.friends:
            car.update(packet)
        for car in self.foes:
            car.update(packet)
        for pad in self.boosts:
            pad.update(packet)
        self.me.update(packet)
        self.ball = ball_object(packet)
        self.game = game_object(self.team, packet)
        self.time = self.game.time

        # When a new kickoff begins we empty the stack
        kickoff = self.game.kickoff
        if kickoff and not self.kickoff_flag:
            self.logger.debug(f"Kickoff at {self.time:.2f}s, dropping {len(self.stack)} routine(s)")
            self.stack.clear()
        # Tells us when to go for kickoff
        self.kickoff_flag = kickoff

    def get_output(self, packet: GameTickPacket) -> SimpleControllerState:
        chrono_start = time.perf_counter()

        # Get ready, then preprocess
        if not self.ready:
            self.get_ready(packet)
        self.preprocess(packet)

        rendering = self.rendering
        if rendering:
            self.renderer.begin_rendering()
        try:
            # Run our strategy code
            self.run()

            # Routines always start from a neutral controller
            self.controller = SimpleControllerState()
            # run the routine on the end of the stack
            self.stack.step(self)

            if rendering:
                self.debug_stack()
        finally:
            if rendering:
                self.renderer.end_rendering()

        self.tick += 1
        delta_time = time.perf_counter() - chrono_start
        if delta_time > self.tick_budget:
            self.logger.warning(f"Slow to execute on tick {self.tick}: {delta_time / self.tick_budget * 100:.3f}%")

        # send our updated controller back to rlbot
        return self.controller

    def run(self):
        # override this with your strategy code
        pass
