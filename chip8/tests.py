""" Tests for chip8 memory, display and keypad """

import unittest

from chip8.memory import Memory,MemoryException,MemoryOutOfRangeException,MEMORY_SIZE
from chip8.display import Framebuffer,FONT,GLYPH_SIZE,DISPLAY_WIDTH,DISPLAY_HEIGHT
from chip8.keypad import Keypad,KeypadException

class MemoryTests(unittest.TestCase):
    def test_zero_initialized(self):
        mem = Memory()
        self.assertEqual(MEMORY_SIZE, len(mem))
        self.assertEqual(0, mem[0])
        self.assertEqual(0, mem[MEMORY_SIZE-1])

    def test_read_write(self):
        mem = Memory()
        mem.write(0x200,0xAB)
        self.assertEqual(0xAB, mem.read(0x200))
        mem[0x201] = 0x01
        self.assertEqual(0x01, mem[0x201])

    def test_out_of_range(self):
        mem = Memory()
        with self.assertRaises(MemoryOutOfRangeException) as context:
            mem.read(MEMORY_SIZE)
        self.assertEqual(MEMORY_SIZE, context.exception.address)
        self.assertRaises(MemoryOutOfRangeException, mem.write, MEMORY_SIZE, 1)
        self.assertRaises(MemoryOutOfRangeException, mem.read, -1)
        self.assertTrue(issubclass(MemoryOutOfRangeException,MemoryException))

    def test_write_not_a_byte(self):
        mem = Memory()
        self.assertRaises(MemoryException, mem.write, 0, 0x100)
        self.assertRaises(MemoryException, mem.write, 0, -1)

    def test_word(self):
        mem = Memory()
        mem.load_block([0x12,0x34],0x10)
        self.assertEqual(0x1234, mem.word(0x10))
        self.assertRaises(MemoryOutOfRangeException, mem.word, MEMORY_SIZE-1)

    def test_load_block(self):
        mem = Memory()
        mem.load_block(b'\x01\x02\x03',0x300)
        self.assertEqual(b'\x01\x02\x03', mem.block(0x300,3))

    def test_load_block_does_not_partially_write(self):
        mem = Memory()
        self.assertRaises(MemoryOutOfRangeException, mem.load_block, [1,2,3], MEMORY_SIZE-2)
        self.assertEqual(0, mem[MEMORY_SIZE-2])
        self.assertEqual(0, mem[MEMORY_SIZE-1])

    def test_block(self):
        mem = Memory()
        self.assertEqual(b'', mem.block(0,0))
        self.assertEqual(b'\x00\x00', mem.block(MEMORY_SIZE-2,2))
        self.assertRaises(MemoryOutOfRangeException, mem.block, MEMORY_SIZE-2, 3)

    def test_dump(self):
        mem = Memory()
        mem.load_block(range(0,20),0x200)
        lines = mem.dump(start_address=0x200,length=20)
        self.assertEqual(2, len(lines))
        self.assertEqual('0200 00 01 02 03 04 05 06 07 08 09 0a 0b 0c 0d 0e 0f', lines[0])
        self.assertEqual('0210 10 11 12 13', lines[1])

class FramebufferTests(unittest.TestCase):
    def test_dimensions(self):
        fb = Framebuffer()
        self.assertEqual(64, fb.width)
        self.assertEqual(32, fb.height)
        self.assertEqual(DISPLAY_HEIGHT, len(fb.rows()))
        self.assertEqual(DISPLAY_WIDTH, len(fb.rows()[0]))

    def test_toggle(self):
        fb = Framebuffer()
        self.assertFalse(fb.is_set(3,4))
        self.assertFalse(fb.toggle_pixel(3,4))
        self.assertTrue(fb.is_set(3,4))
        self.assertTrue(fb.toggle_pixel(3,4))
        self.assertFalse(fb.is_set(3,4))

    def test_wraparound(self):
        fb = Framebuffer()
        fb.toggle_pixel(64,32)
        self.assertTrue(fb.is_set(0,0))
        fb.toggle_pixel(-1,-1)
        self.assertTrue(fb.is_set(63,31))
        fb.toggle_pixel(130,5)
        self.assertTrue(fb.is_set(2,5))

    def test_clear(self):
        fb = Framebuffer()
        fb.toggle_pixel(1,1)
        fb.toggle_pixel(10,20)
        fb.clear()
        self.assertEqual([], list(fb.lit_pixels()))

    def test_lit_pixels(self):
        fb = Framebuffer()
        fb.toggle_pixel(5,0)
        fb.toggle_pixel(1,2)
        self.assertEqual([(5,0),(1,2)], list(fb.lit_pixels()))

    def test_draw_sprite(self):
        fb = Framebuffer(width=8,height=2)
        self.assertFalse(fb.draw_sprite(0,0,[0x81,0x3C]))
        self.assertEqual('#......#\n..####..', str(fb))
        self.assertTrue(fb.draw_sprite(0,0,[0x80]))
        self.assertEqual('.......#\n..####..', str(fb))

    def test_draw_sprite_wraps_to_same_row(self):
        fb = Framebuffer()
        fb.draw_sprite(60,3,[0xFF])
        for x in (60,61,62,63,0,1,2,3):
            self.assertTrue(fb.is_set(x,3))
        self.assertFalse(fb.is_set(4,3))
        self.assertFalse(fb.is_set(0,4))

class FontTests(unittest.TestCase):
    def test_font(self):
        self.assertEqual(16 * GLYPH_SIZE, len(FONT))
        # 0 is a box
        self.assertEqual(bytes([0xF0,0x90,0x90,0x90,0xF0]), FONT[0:5])
        # F is the last glyph
        self.assertEqual(bytes([0xF0,0x80,0xF0,0x80,0x80]), FONT[75:80])

class KeypadTests(unittest.TestCase):
    def test_press_release(self):
        keypad = Keypad()
        self.assertEqual(16, len(keypad))
        self.assertFalse(keypad.is_pressed(0xA))
        keypad.press(0xA)
        self.assertTrue(keypad.is_pressed(0xA))
        self.assertTrue(keypad[0xA])
        self.assertEqual(set([0xA]), keypad.pressed_keys())
        keypad.release(0xA)
        self.assertFalse(keypad[0xA])
        self.assertEqual(set(), keypad.pressed_keys())

    def test_set_item(self):
        keypad = Keypad()
        keypad[3] = True
        keypad[0xF] = 1
        self.assertEqual(set([3,0xF]), keypad.pressed_keys())
        keypad.clear()
        self.assertEqual(set(), keypad.pressed_keys())

    def test_invalid_key(self):
        keypad = Keypad()
        self.assertRaises(KeypadException, keypad.press, 0x10)
        self.assertRaises(KeypadException, keypad.release, -1)
        self.assertFalse(keypad.is_pressed(0x10))
        self.assertFalse(keypad.is_pressed(0xFF))
