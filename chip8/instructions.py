""" Decoding of opcodes, and the handlers that execute each instruction

    Every instruction is two bytes, stored big-endian. The top nibble selects the
    instruction family, and the remaining nibbles are operands:

        x   = bits 8-11, a register number
        y   = bits 4-7, a register number
        n   = bits 0-3
        kk  = bits 0-7, a byte constant
        nnn = bits 0-11, an address

    Families 0, 5, 8, 9, E and F use part of the operand bits to select the instruction.

    The interpreter advances the program counter past the instruction before calling its
    handler. Handlers return an action object telling the interpreter how to proceed from there.

    See http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#3.0
"""
from chip8.display import FONT_ADDRESS,GLYPH_SIZE

INSTRUCTION_SIZE = 2
FLAG_REGISTER = 0xF

### Constants and utilities
class InstructionException(Exception):
    pass

class InvalidOpcodeException(InstructionException):
    """ Thrown when a word does not decode to a known instruction """
    def __init__(self,opcode):
        super(InvalidOpcodeException,self).__init__('Invalid opcode 0x%04x' % opcode)
        self.opcode = opcode

class Instruction(object):
    """ A decoded opcode, split into its operand fields """
    def __init__(self,opcode):
        self.opcode = opcode
        self.family = (opcode & 0xF000) >> 12
        self.x = (opcode & 0x0F00) >> 8
        self.y = (opcode & 0x00F0) >> 4
        self.n = opcode & 0x000F
        self.kk = opcode & 0x00FF
        self.nnn = opcode & 0x0FFF

    def as_dict(self):
        return {'x': self.x, 'y': self.y, 'n': self.n, 'kk': self.kk, 'nnn': self.nnn}

    def __repr__(self):
        return 'Instruction(0x%04x)' % self.opcode

def opcode_key(opcode):
    """ Return the (family, selector) key used to find the handler for opcode """
    family = (opcode & 0xF000) >> 12
    if family == 0x0:
        return family, opcode & 0x0FFF
    elif family in (0x5,0x8,0x9):
        return family, opcode & 0x000F
    elif family in (0xE,0xF):
        return family, opcode & 0x00FF
    return family, None

def decode_opcode(opcode):
    """ Return a handler function (taking an interpreter) and a description of the opcode """
    handler = OPCODE_HANDLERS.get(opcode_key(opcode))
    if not handler:
        raise InvalidOpcodeException(opcode)
    instruction = Instruction(opcode)

    handler_f = lambda interpreter: handler['handler'](interpreter, instruction)
    description = format_description(handler, instruction)

    return handler_f,description

def read_instruction(memory,address):
    """ Read the instruction at the given address, and return a handler function, summary
        and the address of the following instruction """
    handler_f,description = decode_opcode(memory.word(address))
    return handler_f,description,address+INSTRUCTION_SIZE

def format_description(handler, instruction):
    """ Create a text (disassembly) version of this instruction, such as '8124 ADD V1, V2' """
    description = '%04X %s' % (instruction.opcode, handler['name'])
    if handler.get('operands'):
        description += ' ' + handler['operands'] % instruction.as_dict()
    return description

def disassemble(memory,start_address,end_address):
    """ Return a list of (address, description) for each word in [start_address, end_address).
        Programs mix sprite data in with code, so words that aren't instructions are
        listed as data rather than raising """
    listing = []
    address = start_address
    while address + 1 < end_address:
        opcode = memory.word(address)
        try:
            handler_f,description = decode_opcode(opcode)
        except InvalidOpcodeException:
            description = '%04X DW 0x%04X' % (opcode,opcode)
        listing.append((address,description))
        address += INSTRUCTION_SIZE
    return listing

### Interpreter actions, returned at end of each instruction to tell interpreter how to proceed
class NextInstructionAction(object):
    """ Interpreter should proceed to the next instruction. The program counter already points there """
    def apply(self,interpreter):
        pass

class SkipInstructionAction(object):
    """ Interpreter should skip over the next instruction """
    def apply(self,interpreter):
        interpreter.pc += INSTRUCTION_SIZE

class JumpAction(object):
    """ Interpreter should continue at the given address """
    def __init__(self, address):
        self.address = address

    def apply(self,interpreter):
        interpreter.pc = self.address

class CallAction(object):
    """ Interpreter should call the subroutine at the given address """
    def __init__(self, address):
        self.address = address

    def apply(self,interpreter):
        interpreter.call_subroutine(self.address)

class ReturnAction(object):
    """ Interpreter should return from the current subroutine """
    def apply(self,interpreter):
        interpreter.return_from_subroutine()

class WaitForKeyAction(object):
    """ Interpreter should suspend until a key is pressed, then store it to the register """
    def __init__(self, register):
        self.register = register

    def apply(self,interpreter):
        interpreter.wait_for_key(self.register)

def skip_if(condition):
    if condition:
        return SkipInstructionAction()
    return NextInstructionAction()

###
### All handlers are passed in an interpreter and the decoded instruction,
### and return an action object telling interpreter how to proceed.
###
### Handlers read every operand before writing anything, so a register that is both
### source and destination (including VF) sees its pre-instruction value.
###

## Flow control

def op_cls(interpreter,instruction):
    interpreter.framebuffer.clear()
    return NextInstructionAction()

def op_ret(interpreter,instruction):
    return ReturnAction()

def op_jp(interpreter,instruction):
    return JumpAction(instruction.nnn)

def op_call(interpreter,instruction):
    return CallAction(instruction.nnn)

def op_jp_v0(interpreter,instruction):
    return JumpAction(instruction.nnn + interpreter.registers[0])

def op_se_byte(interpreter,instruction):
    return skip_if(interpreter.registers[instruction.x] == instruction.kk)

def op_sne_byte(interpreter,instruction):
    return skip_if(interpreter.registers[instruction.x] != instruction.kk)

def op_se_register(interpreter,instruction):
    return skip_if(interpreter.registers[instruction.x] == interpreter.registers[instruction.y])

def op_sne_register(interpreter,instruction):
    return skip_if(interpreter.registers[instruction.x] != interpreter.registers[instruction.y])

## Loads and arithmetic

def op_ld_byte(interpreter,instruction):
    interpreter.registers[instruction.x] = instruction.kk
    return NextInstructionAction()

def op_add_byte(interpreter,instruction):
    # No carry flag for this one
    interpreter.registers[instruction.x] = (interpreter.registers[instruction.x] + instruction.kk) & 0xFF
    return NextInstructionAction()

def op_ld_register(interpreter,instruction):
    interpreter.registers[instruction.x] = interpreter.registers[instruction.y]
    return NextInstructionAction()

def op_or(interpreter,instruction):
    interpreter.registers[instruction.x] |= interpreter.registers[instruction.y]
    return NextInstructionAction()

def op_and(interpreter,instruction):
    interpreter.registers[instruction.x] &= interpreter.registers[instruction.y]
    return NextInstructionAction()

def op_xor(interpreter,instruction):
    interpreter.registers[instruction.x] ^= interpreter.registers[instruction.y]
    return NextInstructionAction()

def op_add_register(interpreter,instruction):
    vx = interpreter.registers[instruction.x]
    vy = interpreter.registers[instruction.y]
    total = vx + vy

    interpreter.registers[instruction.x] = total & 0xFF
    interpreter.set_flag(1 if total > 0xFF else 0)
    return NextInstructionAction()

def op_sub(interpreter,instruction):
    vx = interpreter.registers[instruction.x]
    vy = interpreter.registers[instruction.y]

    # Flag is NOT borrow
    interpreter.registers[instruction.x] = (vx - vy) & 0xFF
    interpreter.set_flag(1 if vx >= vy else 0)
    return NextInstructionAction()

def op_shr(interpreter,instruction):
    vx = interpreter.registers[instruction.x]

    interpreter.registers[instruction.x] = vx >> 1
    interpreter.set_flag(vx & 0x01)
    return NextInstructionAction()

def op_subn(interpreter,instruction):
    vx = interpreter.registers[instruction.x]
    vy = interpreter.registers[instruction.y]

    interpreter.registers[instruction.x] = (vy - vx) & 0xFF
    interpreter.set_flag(1 if vy >= vx else 0)
    return NextInstructionAction()

def op_shl(interpreter,instruction):
    vx = interpreter.registers[instruction.x]

    interpreter.registers[instruction.x] = (vx << 1) & 0xFF
    interpreter.set_flag((vx & 0x80) >> 7)
    return NextInstructionAction()

def op_ld_i(interpreter,instruction):
    interpreter.address_register = instruction.nnn
    return NextInstructionAction()

def op_rnd(interpreter,instruction):
    interpreter.registers[instruction.x] = interpreter.rng.randbyte() & instruction.kk
    return NextInstructionAction()

## Display

def op_drw(interpreter,instruction):
    # Read the whole sprite first, so a bad address faults before anything is drawn
    sprite = interpreter.memory.block(interpreter.address_register, instruction.n)
    collision = interpreter.framebuffer.draw_sprite(interpreter.registers[instruction.x],
                                                    interpreter.registers[instruction.y],
                                                    sprite)
    interpreter.set_flag(1 if collision else 0)
    return NextInstructionAction()

def op_ld_f(interpreter,instruction):
    interpreter.address_register = FONT_ADDRESS + interpreter.registers[instruction.x] * GLYPH_SIZE
    return NextInstructionAction()

## Keypad

def op_skp(interpreter,instruction):
    return skip_if(interpreter.keypad.is_pressed(interpreter.registers[instruction.x]))

def op_sknp(interpreter,instruction):
    return skip_if(not interpreter.keypad.is_pressed(interpreter.registers[instruction.x]))

def op_ld_key(interpreter,instruction):
    return WaitForKeyAction(instruction.x)

## Timers

def op_ld_from_dt(interpreter,instruction):
    interpreter.registers[instruction.x] = interpreter.delay_timer
    return NextInstructionAction()

def op_ld_dt(interpreter,instruction):
    interpreter.delay_timer = interpreter.registers[instruction.x]
    return NextInstructionAction()

def op_ld_st(interpreter,instruction):
    interpreter.sound_timer = interpreter.registers[instruction.x]
    return NextInstructionAction()

## Memory

def op_add_i(interpreter,instruction):
    # 16 bit wraparound, and no flag
    interpreter.address_register = (interpreter.address_register + interpreter.registers[instruction.x]) & 0xFFFF
    return NextInstructionAction()

def op_ld_bcd(interpreter,instruction):
    val = interpreter.registers[instruction.x]
    interpreter.memory.load_block([val // 100, (val // 10) % 10, val % 10], interpreter.address_register)
    return NextInstructionAction()

def op_store_registers(interpreter,instruction):
    interpreter.memory.load_block(interpreter.registers[0:instruction.x+1], interpreter.address_register)
    return NextInstructionAction()

def op_load_registers(interpreter,instruction):
    values = interpreter.memory.block(interpreter.address_register, instruction.x+1)
    interpreter.registers[0:instruction.x+1] = values
    return NextInstructionAction()

### Keyed by opcode_key(). 'operands' is formatted with the fields of the instruction
OPCODE_HANDLERS = {
(0x0,0x0E0): {'name': 'CLS', 'handler': op_cls},
(0x0,0x0EE): {'name': 'RET', 'handler': op_ret},
(0x1,None):  {'name': 'JP', 'operands': '0x%(nnn)03X', 'handler': op_jp},
(0x2,None):  {'name': 'CALL', 'operands': '0x%(nnn)03X', 'handler': op_call},
(0x3,None):  {'name': 'SE', 'operands': 'V%(x)X, 0x%(kk)02X', 'handler': op_se_byte},
(0x4,None):  {'name': 'SNE', 'operands': 'V%(x)X, 0x%(kk)02X', 'handler': op_sne_byte},
(0x5,0x0):   {'name': 'SE', 'operands': 'V%(x)X, V%(y)X', 'handler': op_se_register},
(0x6,None):  {'name': 'LD', 'operands': 'V%(x)X, 0x%(kk)02X', 'handler': op_ld_byte},
(0x7,None):  {'name': 'ADD', 'operands': 'V%(x)X, 0x%(kk)02X', 'handler': op_add_byte},

(0x8,0x0):   {'name': 'LD', 'operands': 'V%(x)X, V%(y)X', 'handler': op_ld_register},
(0x8,0x1):   {'name': 'OR', 'operands': 'V%(x)X, V%(y)X', 'handler': op_or},
(0x8,0x2):   {'name': 'AND', 'operands': 'V%(x)X, V%(y)X', 'handler': op_and},
(0x8,0x3):   {'name': 'XOR', 'operands': 'V%(x)X, V%(y)X', 'handler': op_xor},
(0x8,0x4):   {'name': 'ADD', 'operands': 'V%(x)X, V%(y)X', 'handler': op_add_register},
(0x8,0x5):   {'name': 'SUB', 'operands': 'V%(x)X, V%(y)X', 'handler': op_sub},
(0x8,0x6):   {'name': 'SHR', 'operands': 'V%(x)X', 'handler': op_shr},
(0x8,0x7):   {'name': 'SUBN', 'operands': 'V%(x)X, V%(y)X', 'handler': op_subn},
(0x8,0xE):   {'name': 'SHL', 'operands': 'V%(x)X', 'handler': op_shl},

(0x9,0x0):   {'name': 'SNE', 'operands': 'V%(x)X, V%(y)X', 'handler': op_sne_register},
(0xA,None):  {'name': 'LD', 'operands': 'I, 0x%(nnn)03X', 'handler': op_ld_i},
(0xB,None):  {'name': 'JP', 'operands': 'V0, 0x%(nnn)03X', 'handler': op_jp_v0},
(0xC,None):  {'name': 'RND', 'operands': 'V%(x)X, 0x%(kk)02X', 'handler': op_rnd},
(0xD,None):  {'name': 'DRW', 'operands': 'V%(x)X, V%(y)X, %(n)d', 'handler': op_drw},

(0xE,0x9E):  {'name': 'SKP', 'operands': 'V%(x)X', 'handler': op_skp},
(0xE,0xA1):  {'name': 'SKNP', 'operands': 'V%(x)X', 'handler': op_sknp},

(0xF,0x07):  {'name': 'LD', 'operands': 'V%(x)X, DT', 'handler': op_ld_from_dt},
(0xF,0x0A):  {'name': 'LD', 'operands': 'V%(x)X, K', 'handler': op_ld_key},
(0xF,0x15):  {'name': 'LD', 'operands': 'DT, V%(x)X', 'handler': op_ld_dt},
(0xF,0x18):  {'name': 'LD', 'operands': 'ST, V%(x)X', 'handler': op_ld_st},
(0xF,0x1E):  {'name': 'ADD', 'operands': 'I, V%(x)X', 'handler': op_add_i},
(0xF,0x29):  {'name': 'LD', 'operands': 'F, V%(x)X', 'handler': op_ld_f},
(0xF,0x33):  {'name': 'LD', 'operands': 'B, V%(x)X', 'handler': op_ld_bcd},
(0xF,0x55):  {'name': 'LD', 'operands': '[I], V%(x)X', 'handler': op_store_registers},
(0xF,0x65):  {'name': 'LD', 'operands': 'V%(x)X, [I]', 'handler': op_load_registers},
}
