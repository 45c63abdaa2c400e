""" Tests for the chip8 interpreter """
import unittest

import pygame

from chip8.interpreter import Interpreter,Program,RNG,InterpreterException,ProgramFileException,\
                              StackOverflowException,StackUnderflowException,PROGRAM_START
from chip8.memory import MemoryOutOfRangeException,MEMORY_SIZE
from chip8.display import FONT
from chip8.instructions import Instruction,InstructionException,InvalidOpcodeException,OPCODE_HANDLERS,\
                               opcode_key,decode_opcode,read_instruction,disassemble
from chip8.keypad import Keypad
from pygame_chip8 import KEYMAPPING,handle_event
from terp import MainLoop,Tracer,SETTINGS

def program_from(*opcodes):
    data = bytearray()
    for opcode in opcodes:
        data.extend([opcode >> 8, opcode & 0xFF])
    return Program(data)

def make_interpreter(*opcodes):
    interpreter = Interpreter(program_from(*opcodes))
    interpreter.rng.enter_predictable_mode(0)
    interpreter.reset()
    return interpreter

def run(*opcodes):
    """ Execute each of the opcodes once, in order """
    interpreter = make_interpreter(*opcodes)
    for i in range(len(opcodes)):
        interpreter.step()
    return interpreter

class InstructionTests(unittest.TestCase):
    def test_fields(self):
        instruction = Instruction(0xD12F)
        self.assertEqual(0xD, instruction.family)
        self.assertEqual(0x1, instruction.x)
        self.assertEqual(0x2, instruction.y)
        self.assertEqual(0xF, instruction.n)
        self.assertEqual(0x2F, instruction.kk)
        self.assertEqual(0x12F, instruction.nnn)

    def test_opcode_key(self):
        self.assertEqual((0x0,0x0E0), opcode_key(0x00E0))
        self.assertEqual((0x1,None), opcode_key(0x1234))
        self.assertEqual((0x5,0x0), opcode_key(0x5120))
        self.assertEqual((0x8,0xE), opcode_key(0x812E))
        self.assertEqual((0xF,0x65), opcode_key(0xF365))

    def test_instruction_set_size(self):
        self.assertEqual(34, len(OPCODE_HANDLERS))

    def test_descriptions(self):
        self.assertEqual('00E0 CLS', decode_opcode(0x00E0)[1])
        self.assertEqual('00EE RET', decode_opcode(0x00EE)[1])
        self.assertEqual('1228 JP 0x228', decode_opcode(0x1228)[1])
        self.assertEqual('6A02 LD VA, 0x02', decode_opcode(0x6A02)[1])
        self.assertEqual('8124 ADD V1, V2', decode_opcode(0x8124)[1])
        self.assertEqual('8106 SHR V1', decode_opcode(0x8106)[1])
        self.assertEqual('A22A LD I, 0x22A', decode_opcode(0xA22A)[1])
        self.assertEqual('B200 JP V0, 0x200', decode_opcode(0xB200)[1])
        self.assertEqual('D015 DRW V0, V1, 5', decode_opcode(0xD015)[1])
        self.assertEqual('E19E SKP V1', decode_opcode(0xE19E)[1])
        self.assertEqual('F10A LD V1, K', decode_opcode(0xF10A)[1])
        self.assertEqual('F355 LD [I], V3', decode_opcode(0xF355)[1])
        self.assertEqual('F365 LD V3, [I]', decode_opcode(0xF365)[1])

    def test_invalid_opcodes(self):
        for opcode in (0x0123,0x5121,0x8008,0x900F,0xE000,0xF000,0xFFFF):
            with self.assertRaises(InvalidOpcodeException) as context:
                decode_opcode(opcode)
            self.assertEqual(opcode, context.exception.opcode)
        self.assertTrue(issubclass(InvalidOpcodeException,InstructionException))

    def test_read_instruction(self):
        interpreter = make_interpreter(0x6A02, 0x00E0)
        handler_f,description,next_address = read_instruction(interpreter.memory, PROGRAM_START)
        self.assertEqual('6A02 LD VA, 0x02', description)
        self.assertEqual(0x202, next_address)

    def test_disassemble(self):
        interpreter = make_interpreter(0x6A02, 0xFFFF, 0x1200)
        listing = disassemble(interpreter.memory, PROGRAM_START, PROGRAM_START+6)
        self.assertEqual([(0x200,'6A02 LD VA, 0x02'),
                          (0x202,'FFFF DW 0xFFFF'),
                          (0x204,'1200 JP 0x200')], listing)

class InterpreterStateTests(unittest.TestCase):
    def test_initial_state(self):
        interpreter = make_interpreter(0x1200)
        self.assertEqual(PROGRAM_START, interpreter.pc)
        self.assertEqual(0, interpreter.sp)
        self.assertEqual(0, interpreter.address_register)
        self.assertEqual(bytearray(16), interpreter.registers)
        self.assertEqual(0, interpreter.delay_timer)
        self.assertEqual(0, interpreter.sound_timer)
        self.assertEqual(FONT, interpreter.memory.block(0,len(FONT)))
        self.assertEqual(0x12, interpreter.memory[0x200])
        self.assertEqual(0x00, interpreter.memory[0x201])
        self.assertEqual(Interpreter.RUNNING_STATE, interpreter.state)

    def test_not_initialized(self):
        interpreter = Interpreter(program_from(0x1200))
        self.assertRaises(InterpreterException, interpreter.step)

    def test_invalid_programs(self):
        self.assertRaises(ProgramFileException, Interpreter(Program(b'')).reset)
        self.assertRaises(ProgramFileException, Interpreter(Program(bytes(MEMORY_SIZE - PROGRAM_START + 1))).reset)
        # Largest program that fits
        Interpreter(Program(bytes(MEMORY_SIZE - PROGRAM_START))).reset()

    def test_reset(self):
        interpreter = run(0x6A02, 0xA300, 0x2300)
        interpreter.framebuffer.toggle_pixel(0,0)
        interpreter.reset()
        self.assertEqual(PROGRAM_START, interpreter.pc)
        self.assertEqual(0, interpreter.registers[0xA])
        self.assertEqual(0, interpreter.address_register)
        self.assertEqual(0, interpreter.sp)
        self.assertFalse(interpreter.framebuffer.is_set(0,0))

    def test_last_instruction(self):
        interpreter = run(0x6A02)
        self.assertEqual('6A02 LD VA, 0x02', interpreter.last_instruction)

    def test_instructions(self):
        interpreter = make_interpreter(0x6A02, 0x7A01, 0x1200)
        self.assertEqual([(0x200,'6A02 LD VA, 0x02'),(0x202,'7A01 ADD VA, 0x01')], interpreter.instructions(2))
        self.assertEqual('6A02 LD VA, 0x02', interpreter.current_instruction()[1])

    def test_dump_state(self):
        interpreter = run(0x6A02)
        state = interpreter.dump_state()
        self.assertIn('PC: 0x0202', state)
        self.assertIn('VA: 0x02', state)

class RNGTests(unittest.TestCase):
    def test_predictable(self):
        rng = RNG()
        rng.enter_predictable_mode(42)
        first = [rng.randbyte() for i in range(10)]
        rng.enter_predictable_mode(42)
        self.assertEqual(first, [rng.randbyte() for i in range(10)])
        for val in first:
            self.assertTrue(0 <= val <= 0xFF)

class FlowControlTests(unittest.TestCase):
    def test_jump(self):
        interpreter = run(0x1345)
        self.assertEqual(0x345, interpreter.pc)

    def test_jump_v0(self):
        interpreter = run(0x6004, 0xB300)
        self.assertEqual(0x304, interpreter.pc)

    def test_call_and_return(self):
        # 0x200 call 0x206, 0x202 LD, 0x204 loop, 0x206 RET
        interpreter = make_interpreter(0x2206, 0x6101, 0x1204, 0x00EE)
        interpreter.step()
        self.assertEqual(0x206, interpreter.pc)
        self.assertEqual(1, interpreter.sp)
        self.assertEqual(0x202, interpreter.stack[0])
        interpreter.step()
        self.assertEqual(0x202, interpreter.pc)
        self.assertEqual(0, interpreter.sp)

    def test_stack_overflow(self):
        # Call itself forever
        interpreter = make_interpreter(0x2200)
        for i in range(16):
            interpreter.step()
        self.assertEqual(16, interpreter.sp)
        self.assertRaises(StackOverflowException, interpreter.step)
        self.assertEqual(16, interpreter.sp)
        self.assertEqual(0x200, interpreter.pc)
        self.assertTrue(issubclass(StackOverflowException,InterpreterException))

    def test_stack_underflow(self):
        interpreter = make_interpreter(0x00EE)
        self.assertRaises(StackUnderflowException, interpreter.step)
        self.assertEqual(0, interpreter.sp)
        self.assertEqual(0x200, interpreter.pc)

    def test_skip_equal_byte(self):
        self.assertEqual(0x206, run(0x6042, 0x3042).pc)
        self.assertEqual(0x204, run(0x6042, 0x3043).pc)

    def test_skip_not_equal_byte(self):
        self.assertEqual(0x204, run(0x6042, 0x4042).pc)
        self.assertEqual(0x206, run(0x6042, 0x4043).pc)

    def test_skip_registers(self):
        self.assertEqual(0x208, run(0x6042, 0x6142, 0x5010).pc)
        self.assertEqual(0x206, run(0x6042, 0x6143, 0x5010).pc)
        self.assertEqual(0x206, run(0x6042, 0x6142, 0x9010).pc)
        self.assertEqual(0x208, run(0x6042, 0x6143, 0x9010).pc)

    def test_invalid_opcode(self):
        interpreter = make_interpreter(0x6001, 0x5121)
        interpreter.step()
        with self.assertRaises(InvalidOpcodeException) as context:
            interpreter.step()
        self.assertEqual(0x5121, context.exception.opcode)
        self.assertEqual(0x204, interpreter.pc)
        self.assertEqual(1, interpreter.registers[0])

    def test_fetch_past_end_of_memory(self):
        interpreter = make_interpreter(0x1FFF)
        interpreter.step()
        self.assertRaises(MemoryOutOfRangeException, interpreter.step)
        self.assertEqual(0xFFF, interpreter.pc)

class ArithmeticTests(unittest.TestCase):
    def test_load_byte(self):
        interpreter = run(0x6A2B)
        self.assertEqual(0x2B, interpreter.registers[0xA])

    def test_add_byte_wraps_without_flag(self):
        interpreter = run(0x6F05, 0x6AFF, 0x7A02)
        self.assertEqual(0x01, interpreter.registers[0xA])
        self.assertEqual(0x05, interpreter.registers[0xF])

    def test_load_register(self):
        interpreter = run(0x6133, 0x8010)
        self.assertEqual(0x33, interpreter.registers[0])

    def test_bitwise(self):
        self.assertEqual(0xFC, run(0x60F0, 0x613C, 0x8011).registers[0])
        self.assertEqual(0x30, run(0x60F0, 0x613C, 0x8012).registers[0])
        self.assertEqual(0xCC, run(0x60F0, 0x613C, 0x8013).registers[0])

    def test_add_registers(self):
        interpreter = run(0x60FF, 0x6101, 0x8014)
        self.assertEqual(0x00, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

        interpreter = run(0x6F01, 0x6010, 0x6101, 0x8014)
        self.assertEqual(0x11, interpreter.registers[0])
        self.assertEqual(0, interpreter.registers[0xF])

    def test_sub(self):
        interpreter = run(0x6005, 0x610A, 0x8015)
        self.assertEqual(0xFB, interpreter.registers[0])
        self.assertEqual(0, interpreter.registers[0xF])

        interpreter = run(0x600A, 0x6105, 0x8015)
        self.assertEqual(0x05, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

        # Equal values don't borrow
        interpreter = run(0x6007, 0x6107, 0x8015)
        self.assertEqual(0x00, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

    def test_shr(self):
        interpreter = run(0x6003, 0x8006)
        self.assertEqual(0x01, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

        interpreter = run(0x6F01, 0x6002, 0x8006)
        self.assertEqual(0x01, interpreter.registers[0])
        self.assertEqual(0, interpreter.registers[0xF])

    def test_subn(self):
        interpreter = run(0x6005, 0x610A, 0x8017)
        self.assertEqual(0x05, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

        interpreter = run(0x600A, 0x6105, 0x8017)
        self.assertEqual(0xFB, interpreter.registers[0])
        self.assertEqual(0, interpreter.registers[0xF])

    def test_shl(self):
        interpreter = run(0x6081, 0x800E)
        self.assertEqual(0x02, interpreter.registers[0])
        self.assertEqual(1, interpreter.registers[0xF])

        interpreter = run(0x6F01, 0x6041, 0x800E)
        self.assertEqual(0x82, interpreter.registers[0])
        self.assertEqual(0, interpreter.registers[0xF])

    def test_flag_register_as_destination(self):
        # VF = 0xFF + 0x01, the carry is written last
        interpreter = run(0x6FFF, 0x6101, 0x8F14)
        self.assertEqual(1, interpreter.registers[0xF])

        # VF = 0x05 - 0x0A borrows, so VF ends up 0 rather than 0xFB
        interpreter = run(0x6F05, 0x610A, 0x8F15)
        self.assertEqual(0, interpreter.registers[0xF])

        interpreter = run(0x6F80, 0x8FFE)
        self.assertEqual(1, interpreter.registers[0xF])

    def test_same_register_operands(self):
        interpreter = run(0x6180, 0x8114)
        self.assertEqual(0x00, interpreter.registers[1])
        self.assertEqual(1, interpreter.registers[0xF])

        interpreter = run(0x6180, 0x8115)
        self.assertEqual(0x00, interpreter.registers[1])
        self.assertEqual(1, interpreter.registers[0xF])

    def test_random(self):
        first = run(0xC0FF, 0xC10F)
        second = run(0xC0FF, 0xC10F)
        self.assertEqual(first.registers[0], second.registers[0])
        self.assertEqual(0, first.registers[1] & 0xF0)

        interpreter = run(0xC000)
        self.assertEqual(0, interpreter.registers[0])

class MemoryInstructionTests(unittest.TestCase):
    def test_load_i(self):
        self.assertEqual(0x123, run(0xA123).address_register)

    def test_add_i(self):
        interpreter = run(0xA100, 0x6020, 0xF01E)
        self.assertEqual(0x120, interpreter.address_register)

    def test_add_i_wraps_at_16_bits(self):
        interpreter = make_interpreter(0x6002, 0x6F07, 0xF01E)
        interpreter.step()
        interpreter.step()
        interpreter.address_register = 0xFFFF
        interpreter.step()
        self.assertEqual(0x0001, interpreter.address_register)
        self.assertEqual(0x07, interpreter.registers[0xF])

    def test_font_address(self):
        interpreter = run(0x600A, 0xF029)
        self.assertEqual(50, interpreter.address_register)

    def test_bcd(self):
        interpreter = run(0x607B, 0xA300, 0xF033)
        self.assertEqual(b'\x01\x02\x03', interpreter.memory.block(0x300,3))

        interpreter = run(0x60FF, 0xA300, 0xF033)
        self.assertEqual(b'\x02\x05\x05', interpreter.memory.block(0x300,3))

        interpreter = run(0x6009, 0xA300, 0xF033)
        self.assertEqual(b'\x00\x00\x09', interpreter.memory.block(0x300,3))

    def test_store_registers(self):
        interpreter = run(0x6001, 0x6102, 0x6203, 0x6304, 0xA300, 0xF255)
        self.assertEqual(b'\x01\x02\x03\x00', interpreter.memory.block(0x300,4))

    def test_load_registers(self):
        interpreter = make_interpreter(0xA300, 0xF265)
        interpreter.memory.load_block([7,8,9,10],0x300)
        interpreter.step()
        interpreter.step()
        self.assertEqual(7, interpreter.registers[0])
        self.assertEqual(8, interpreter.registers[1])
        self.assertEqual(9, interpreter.registers[2])
        self.assertEqual(0, interpreter.registers[3])

    def test_store_registers_out_of_range_writes_nothing(self):
        interpreter = make_interpreter(0x6001, 0x6102, 0x6203, 0xAFFE, 0xF255)
        for i in range(4):
            interpreter.step()
        self.assertRaises(MemoryOutOfRangeException, interpreter.step)
        self.assertEqual(b'\x00\x00', interpreter.memory.block(0xFFE,2))
        self.assertEqual(0x208, interpreter.pc)

    def test_load_registers_out_of_range_reads_nothing(self):
        interpreter = make_interpreter(0x6005, 0xAFFF, 0xF165)
        interpreter.step()
        interpreter.step()
        self.assertRaises(MemoryOutOfRangeException, interpreter.step)
        self.assertEqual(5, interpreter.registers[0])

class DisplayInstructionTests(unittest.TestCase):
    def test_clear(self):
        interpreter = make_interpreter(0x00E0)
        interpreter.framebuffer.toggle_pixel(1,1)
        interpreter.step()
        self.assertFalse(interpreter.framebuffer.is_set(1,1))

    def test_draw(self):
        # Glyph for 0 at (1,2)
        interpreter = run(0x6001, 0x6102, 0xA000, 0xD015)
        self.assertEqual(0, interpreter.registers[0xF])
        self.assertTrue(interpreter.framebuffer.is_set(1,2))
        self.assertTrue(interpreter.framebuffer.is_set(4,2))
        self.assertFalse(interpreter.framebuffer.is_set(5,2))
        self.assertTrue(interpreter.framebuffer.is_set(1,3))
        self.assertFalse(interpreter.framebuffer.is_set(2,3))
        self.assertEqual(14, len(list(interpreter.framebuffer.lit_pixels())))

    def test_draw_twice_erases_with_collision(self):
        interpreter = run(0x6001, 0x6102, 0xA000, 0xD015, 0xD015)
        self.assertEqual(1, interpreter.registers[0xF])
        self.assertEqual([], list(interpreter.framebuffer.lit_pixels()))

    def test_draw_wraps(self):
        # Solid 8 pixel line starting 4 pixels from the right edge
        interpreter = make_interpreter(0x603C, 0x6100, 0xA300, 0xD011)
        interpreter.memory[0x300] = 0xFF
        for i in range(4):
            interpreter.step()
        for x in (60,61,62,63,0,1,2,3):
            self.assertTrue(interpreter.framebuffer.is_set(x,0))
        self.assertFalse(interpreter.framebuffer.is_set(4,0))
        self.assertFalse(interpreter.framebuffer.is_set(0,1))

    def test_draw_out_of_range_draws_nothing(self):
        interpreter = make_interpreter(0x6F07, 0xAFFF, 0xD002)
        interpreter.step()
        interpreter.step()
        self.assertRaises(MemoryOutOfRangeException, interpreter.step)
        self.assertEqual([], list(interpreter.framebuffer.lit_pixels()))
        self.assertEqual(7, interpreter.registers[0xF])
        self.assertEqual(0x204, interpreter.pc)

class KeypadInstructionTests(unittest.TestCase):
    def test_skip_if_pressed(self):
        interpreter = make_interpreter(0x6005, 0xE09E)
        interpreter.keypad.press(5)
        interpreter.step()
        interpreter.step()
        self.assertEqual(0x206, interpreter.pc)

        interpreter = run(0x6005, 0xE09E)
        self.assertEqual(0x204, interpreter.pc)

    def test_skip_if_not_pressed(self):
        interpreter = make_interpreter(0x6005, 0xE0A1)
        interpreter.keypad.press(5)
        interpreter.step()
        interpreter.step()
        self.assertEqual(0x204, interpreter.pc)

        interpreter = run(0x6005, 0xE0A1)
        self.assertEqual(0x206, interpreter.pc)

    def test_skip_with_key_off_keypad(self):
        interpreter = run(0x6020, 0xE0A1)
        self.assertEqual(0x206, interpreter.pc)

    def test_shared_keypad(self):
        keypad = Keypad()
        interpreter = Interpreter(program_from(0x6003, 0xE09E), keypad=keypad)
        interpreter.reset()
        keypad.press(3)
        interpreter.step()
        interpreter.step()
        self.assertEqual(0x206, interpreter.pc)

    def test_wait_for_key(self):
        interpreter = make_interpreter(0xF50A, 0x6101)
        self.assertEqual(Interpreter.WAITING_FOR_KEY_STATE, interpreter.step())
        for i in range(5):
            self.assertEqual(Interpreter.WAITING_FOR_KEY_STATE, interpreter.step())
            self.assertEqual(0x200, interpreter.pc)
            self.assertEqual(0, interpreter.registers[5])

        interpreter.keypad.press(7)
        self.assertEqual(Interpreter.RUNNING_STATE, interpreter.step())
        self.assertEqual(7, interpreter.registers[5])
        self.assertEqual(0x202, interpreter.pc)

        interpreter.step()
        self.assertEqual(1, interpreter.registers[1])
        self.assertEqual(0x204, interpreter.pc)

    def test_wait_for_key_needs_new_press(self):
        interpreter = make_interpreter(0xF50A)
        interpreter.keypad.press(3)
        interpreter.step()
        interpreter.step()
        self.assertEqual(Interpreter.WAITING_FOR_KEY_STATE, interpreter.state)

        interpreter.keypad.release(3)
        interpreter.step()
        self.assertEqual(Interpreter.WAITING_FOR_KEY_STATE, interpreter.state)

        interpreter.keypad.press(3)
        interpreter.step()
        self.assertEqual(Interpreter.RUNNING_STATE, interpreter.state)
        self.assertEqual(3, interpreter.registers[5])
        self.assertEqual(0x202, interpreter.pc)

    def test_wait_for_key_lowest_wins(self):
        interpreter = make_interpreter(0xF00A)
        interpreter.step()
        interpreter.keypad.press(0xC)
        interpreter.keypad.press(0x4)
        interpreter.step()
        self.assertEqual(0x4, interpreter.registers[0])

    def test_timers_run_while_waiting(self):
        interpreter = make_interpreter(0x6003, 0xF015, 0xF00A)
        for i in range(3):
            interpreter.step()
        interpreter.tick()
        self.assertEqual(2, interpreter.delay_timer)

class TimerTests(unittest.TestCase):
    def test_set_and_read_delay(self):
        interpreter = run(0x6009, 0xF015, 0xF107)
        self.assertEqual(9, interpreter.delay_timer)
        self.assertEqual(9, interpreter.registers[1])

    def test_tick(self):
        interpreter = run(0x6002, 0xF015, 0x6101, 0xF118)
        self.assertTrue(interpreter.sound_active)
        interpreter.tick()
        self.assertEqual(1, interpreter.delay_timer)
        self.assertEqual(0, interpreter.sound_timer)
        self.assertFalse(interpreter.sound_active)

    def test_timer_floor(self):
        interpreter = run(0x6002, 0xF015, 0xF018)
        for i in range(10):
            interpreter.tick()
        self.assertEqual(0, interpreter.delay_timer)
        self.assertEqual(0, interpreter.sound_timer)

class PygameTests(unittest.TestCase):
    def test_keymapping(self):
        self.assertEqual(16, len(KEYMAPPING))
        self.assertEqual(set(range(16)), set(KEYMAPPING.values()))

    def test_handle_event(self):
        keypad = Keypad()
        self.assertTrue(handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x), keypad))
        self.assertTrue(keypad.is_pressed(0x0))
        self.assertTrue(handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_v), keypad))
        self.assertTrue(keypad.is_pressed(0xF))
        self.assertTrue(handle_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_x), keypad))
        self.assertFalse(keypad.is_pressed(0x0))
        # Unmapped keys are ignored
        self.assertTrue(handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p), keypad))
        self.assertEqual(set([0xF]), keypad.pressed_keys())

    def test_quit_event(self):
        keypad = Keypad()
        self.assertFalse(handle_event(pygame.event.Event(pygame.QUIT), keypad))
        self.assertFalse(handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE), keypad))

class MainLoopTests(unittest.TestCase):
    def test_frame(self):
        # Add one to V0 and loop, with the delay timer set
        interpreter = make_interpreter(0x6105, 0xF115, 0x7001, 0x1204)
        tracer = Tracer(None)
        loop = MainLoop(interpreter, dict(SETTINGS, cpu_hz=600, timer_hz=60), tracer=tracer)
        self.assertEqual(10, loop.steps_per_frame)
        loop.frame()
        self.assertEqual(4, interpreter.registers[0])
        self.assertEqual(4, interpreter.delay_timer)
        self.assertEqual(10, len(tracer.lines))
        self.assertEqual('0200: 6105 LD V1, 0x05', tracer.lines[0])

if __name__ == '__main__':
    unittest.main()
