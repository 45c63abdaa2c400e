""" See http://devernay.free.fr/hacks/chip8/C8TECH10.HTM for a definition of the CHIP-8
    See DESIGN.md for a summary of architecture
"""
import logging
import random

from chip8.memory import Memory,MemoryException,MEMORY_SIZE
from chip8.display import Framebuffer,FONT,FONT_ADDRESS
from chip8.keypad import Keypad
from chip8.instructions import decode_opcode,read_instruction,disassemble,INSTRUCTION_SIZE,FLAG_REGISTER

logger = logging.getLogger(__name__)

# Programs are loaded here. Below it was historically the interpreter itself, now just the font
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

REGISTER_COUNT = 16
STACK_SIZE = 16

class ProgramFileException(Exception):
    """ Thrown in cases where a program image is invalid """
    pass

class InterpreterException(Exception):
    """ General exception in handling by the interpreter """
    pass

class StackOverflowException(InterpreterException):
    """ Thrown when a program calls a subroutine with the call stack full """
    pass

class StackUnderflowException(InterpreterException):
    """ Thrown when a program returns with nothing on the call stack """
    pass

class RNG(object):
    """ The random number generator used by RND. Toggles between a predictable (seeded)
        mode, for tests and reproducible runs, and a random mode """
    def __init__(self):
        self._random = random.Random()
        self.enter_random_mode()

    def enter_random_mode(self):
        self.seed = None
        self._random.seed()

    def enter_predictable_mode(self, seed):
        self.seed = seed
        self._random.seed(seed)

    def randbyte(self):
        """ Return random integer r such that 0 <= r <= 0xFF """
        return self._random.randint(0,0xFF)

class Program(object):
    """ Raw binary image of a program. There is no header; the bytes are copied as-is to PROGRAM_START """
    def __init__(self,data):
        self.data = bytes(data)

    def validate(self):
        if len(self.data) == 0:
            raise ProgramFileException('Program is empty')
        if len(self.data) > MAX_PROGRAM_SIZE:
            raise ProgramFileException('Program is %d bytes, larger than the %d bytes available' % (len(self.data),MAX_PROGRAM_SIZE))

class Interpreter(object):
    """ Main interface to the machine. Owns all of its state: memory, registers, call stack,
        timers and framebuffer. The keypad is shared with the input front end, which updates it.

        Call reset to start the interpreter, then step() to execute instructions and tick()
        (at 60hz) to run down the timers. Calls to step() and tick() must not overlap.
    """
    RUNNING_STATE = 0
    WAITING_FOR_KEY_STATE = 1

    def __init__(self,program,keypad=None,framebuffer=None,rng=None):
        self.program = program
        self.keypad = keypad or Keypad()
        self.framebuffer = framebuffer or Framebuffer()
        self.rng = rng or RNG()
        self.memory = Memory()
        self.initialized = False
        self.state = Interpreter.RUNNING_STATE
        self._clear_registers()

    def _clear_registers(self):
        self.registers = bytearray(REGISTER_COUNT)
        self.address_register = 0  # I
        self.pc = PROGRAM_START    # program counter
        self.stack = [0] * STACK_SIZE
        self.sp = 0                # stack pointer
        self.delay_timer = 0
        self.sound_timer = 0
        self.last_instruction = None

        # Set while waiting on LD Vx, K
        self._key_register = None
        self._held_keys = set()

    def reset(self):
        """ Start/restart the interpreter. Raises ProgramFileException if the program is invalid """
        self.program.validate()
        self.memory.clear()
        self.memory.load_block(FONT, FONT_ADDRESS)
        self.memory.load_block(self.program.data, PROGRAM_START)
        self.framebuffer.clear()
        self._clear_registers()
        self.state = Interpreter.RUNNING_STATE
        self.initialized = True
        logger.info('Loaded %d byte program at 0x%03x', len(self.program.data), PROGRAM_START)

    def _check_initialized(self):
        if not self.initialized:
            raise InterpreterException('Interpreter is not yet initialized')

    def set_flag(self,val):
        """ Write the carry/borrow/collision output of an instruction to VF """
        self.registers[FLAG_REGISTER] = val

    @property
    def sound_active(self):
        return self.sound_timer > 0

    def call_subroutine(self,address):
        """ Push the program counter (already pointing at the next instruction) and jump to address """
        if self.sp >= STACK_SIZE:
            raise StackOverflowException('Call to 0x%03x with full stack (depth %d)' % (address,self.sp))
        self.stack[self.sp] = self.pc
        self.sp += 1
        self.pc = address

    def return_from_subroutine(self):
        """ Pop the call stack into the program counter. If stack is empty, throw exception """
        if self.sp == 0:
            raise StackUnderflowException('Return with empty stack')
        self.sp -= 1
        self.pc = self.stack[self.sp]

    def wait_for_key(self,register):
        """ Suspend until a key is pressed. Keys held at this point have to be released and
            pressed again to count """
        self.pc -= INSTRUCTION_SIZE
        self.state = Interpreter.WAITING_FOR_KEY_STATE
        self._key_register = register
        self._held_keys = self.keypad.pressed_keys()
        logger.debug('Waiting for key into V%X', register)

    def _handle_key_wait(self):
        pressed = self.keypad.pressed_keys()
        new_keys = sorted(pressed - self._held_keys)
        if not new_keys:
            # Anything let go of since the wait started counts again when pressed
            self._held_keys &= pressed
            return

        key = new_keys[0]
        self.registers[self._key_register] = key
        self.pc += INSTRUCTION_SIZE
        self.state = Interpreter.RUNNING_STATE
        logger.debug('Key 0x%x pressed, stored to V%X', key, self._key_register)
        self._key_register = None
        self._held_keys = set()

    def step(self):
        """ If in running state, execute the current instruction. If waiting for a key,
            check the keypad instead. Returns the state after the step.

            The program counter is moved past the instruction before it executes. If the instruction
            faults, none of its effects are kept and the program counter is left pointing at it,
            except for invalid opcodes which leave it past the bad word.
        """
        self._check_initialized()
        if self.state == Interpreter.WAITING_FOR_KEY_STATE:
            self._handle_key_wait()
            return self.state

        address = self.pc
        opcode = self.memory.word(address)
        self.pc += INSTRUCTION_SIZE
        self.last_instruction = '%04X' % opcode

        handler_f,description = decode_opcode(opcode)
        self.last_instruction = description
        logger.debug('%04x: %s', address, description)

        try:
            result = handler_f(self)
            result.apply(self)
        except (MemoryException,InterpreterException):
            self.pc = address
            raise

        return self.state

    def tick(self):
        """ Count the timers down by one, stopping at zero. Called at 60hz """
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def instruction_at(self,address):
        """ Return the handler, description and next address for the instruction at address """
        self._check_initialized()
        return read_instruction(self.memory,address)

    def current_instruction(self):
        """ Return the current instruction """
        return self.instruction_at(self.pc)

    def instructions(self,how_many):
        """ Return (address, description) for how_many instructions starting at the current one """
        self._check_initialized()
        end_address = min(self.pc + how_many*INSTRUCTION_SIZE, len(self.memory))
        return disassemble(self.memory,self.pc,end_address)

    def dump_state(self):
        """ Return registers, timers and stack as text, for debugging """
        lines = ['PC: 0x%04x  I: 0x%04x  SP: %d  DT: %d  ST: %d' % (self.pc,self.address_register,self.sp,
                                                                 self.delay_timer,self.sound_timer)]
        for row in range(0,REGISTER_COUNT,4):
            lines.append('  '.join('V%X: 0x%02x' % (i,self.registers[i]) for i in range(row,row+4)))
        lines.append('Stack: [%s]' % ', '.join('0x%03x' % x for x in self.stack[0:self.sp]))
        if self.state == Interpreter.WAITING_FOR_KEY_STATE:
            lines.append('Waiting for key into V%X' % self._key_register)
        return '\n'.join(lines)
