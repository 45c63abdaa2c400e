""" The monochrome framebuffer and the built-in hex font """

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Sprites are 8 pixels wide
SPRITE_WIDTH = 8

# Built-in font for hex digits 0-F, 5 bytes per glyph, stored at FONT_ADDRESS
FONT_ADDRESS = 0x00
GLYPH_SIZE = 5
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

class Framebuffer(object):
    """ Grid of single bit pixels. Coordinates wrap around on both axes, so writes never fault.

        Only the clear and draw instructions write to the framebuffer. Renderers should
        only read from it, using is_set(), rows() or lit_pixels().
    """
    def __init__(self,width=DISPLAY_WIDTH,height=DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self._pixels = bytearray(width*height)

    def _index(self,x,y):
        return (y % self.height) * self.width + (x % self.width)

    def clear(self):
        self._pixels = bytearray(self.width*self.height)

    def toggle_pixel(self,x,y):
        """ XOR the pixel at x,y. Returns True if the pixel was set before the toggle """
        idx = self._index(x,y)
        was_set = self._pixels[idx] == 1
        self._pixels[idx] ^= 1
        return was_set

    def draw_sprite(self,x,y,sprite):
        """ Toggle a pixel for every set bit of sprite (one byte per row, high bit leftmost),
            starting at x,y. Returns True if any pixel was turned off """
        collision = False
        for row,bits in enumerate(sprite):
            for col in range(SPRITE_WIDTH):
                if bits & (0x80 >> col):
                    if self.toggle_pixel(x+col,y+row):
                        collision = True
        return collision

    def is_set(self,x,y):
        return self._pixels[self._index(x,y)] == 1

    def rows(self):
        """ Return the grid as a list of rows of booleans """
        return [[self._pixels[y*self.width + x] == 1 for x in range(self.width)]
                for y in range(self.height)]

    def lit_pixels(self):
        """ Yield (x,y) for every set pixel """
        for idx,val in enumerate(self._pixels):
            if val:
                yield idx % self.width, idx // self.width

    def __str__(self):
        return '\n'.join(''.join('#' if pixel else '.' for pixel in row) for row in self.rows())
