import sys
import logging
import argparse

import pygame

from chip8.interpreter import Program,Interpreter,InterpreterException,ProgramFileException
from chip8.memory import MemoryException
from chip8.instructions import InstructionException

from pygame_chip8 import PygameWrapper

SETTINGS = {'scale': 10,
            'caption': 'CHIP-8',
            'foreground_color': (255,255,255),
            'background_color': (0,0,0),
            'cpu_hz': 600,
            'timer_hz': 60,
            'beep_frequency': 440}

logger = logging.getLogger('terp')

class QuitException(Exception):
    """ Thrown when the user closes the window """
    pass

class Tracer(object):
    """ Writes every executed instruction to a file """
    def __init__(self,path):
        self.path = path
        self.lines = []

    def log_instruction(self,pc,description):
        self.lines.append('%04x: %s' % (pc,description))

    def flush(self):
        with open(self.path,'a') as f:
            for line in self.lines:
                f.write(line + '\n')
        self.lines = []

class MainLoop(object):
    """ Drives the interpreter from the pygame event loop. Each frame (at timer_hz) runs
        cpu_hz/timer_hz instructions, then ticks the timers and redraws """
    def __init__(self,interpreter,settings,tracer=None):
        self.interpreter = interpreter
        self.settings = settings
        self.tracer = tracer
        self.steps_per_frame = max(1, settings['cpu_hz'] // settings['timer_hz'])

    def step(self):
        pc = self.interpreter.pc
        state = self.interpreter.step()
        if self.tracer and state == Interpreter.RUNNING_STATE:
            self.tracer.log_instruction(pc,self.interpreter.last_instruction)

    def frame(self):
        for i in range(self.steps_per_frame):
            self.step()
        self.interpreter.tick()

    def loop(self):
        pygame_wrapper = PygameWrapper(self.settings)
        clock = pygame.time.Clock()
        try:
            while pygame_wrapper.tick(self.interpreter.keypad):
                self.frame()
                pygame_wrapper.draw(self.interpreter.framebuffer)
                pygame_wrapper.sound(self.interpreter.sound_active)
                if self.tracer:
                    self.tracer.flush()
                clock.tick(self.settings['timer_hz'])
        finally:
            pygame_wrapper.quit()

        # If pygame returns False, treat as a quit
        raise QuitException()

def load_interpreter(filename,seed=None):
    with open(filename,'rb') as f:
        interpreter = Interpreter(Program(f.read()))
    if seed is not None:
        interpreter.rng.enter_predictable_mode(seed)
    interpreter.reset()
    return interpreter

def start(path,settings,trace_file_path=None,seed=None):
    tracer = None
    if trace_file_path:
        tracer = Tracer(trace_file_path)

    interpreter = load_interpreter(path,seed=seed)
    loop = MainLoop(interpreter,settings,tracer=tracer)
    try:
        loop.loop()
    except (InstructionException,MemoryException,InterpreterException) as e:
        logger.error('%s at PC 0x%04x [%s]\n%s', e, interpreter.pc, interpreter.last_instruction, interpreter.dump_state())
        return 1
    finally:
        if tracer:
            tracer.flush()

def main(*args):
    parser = argparse.ArgumentParser(description='Run a CHIP-8 program')
    parser.add_argument('program',help='Program file to run')
    parser.add_argument('--scale',help='Size of each CHIP-8 pixel on screen',type=int,default=SETTINGS['scale'])
    parser.add_argument('--cpu_hz',help='Instructions executed per second',type=int,default=SETTINGS['cpu_hz'])
    parser.add_argument('--seed',help='Optional seed for RNG',type=int,required=False)
    parser.add_argument('--trace_file',help='Path to file to which the terp will write every executed instruction',required=False)
    parser.add_argument('--verbose',help='Log at debug level',required=False,action='store_true')
    data = parser.parse_args(args or None)

    logging.basicConfig(level=logging.DEBUG if data.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    settings = dict(SETTINGS)
    settings['scale'] = data.scale
    settings['cpu_hz'] = data.cpu_hz

    try:
        return start(data.program,settings,trace_file_path=data.trace_file,seed=data.seed)
    except QuitException:
        print("Thanks for playing!")
    except ProgramFileException as e:
        print('Unable to load program. %s' % e)
        return 1

if __name__ == "__main__":
    sys.exit(main())
