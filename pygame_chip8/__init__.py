import logging
from array import array

import pygame

from chip8.display import DISPLAY_WIDTH,DISPLAY_HEIGHT

logger = logging.getLogger(__name__)

BLACK_COLOR = (0,0,0)
WHITE_COLOR = (255,255,255)

# The hex keypad is mapped onto the left side of a qwerty keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEYMAPPING = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

def handle_event(event,keypad):
    """ Apply a pygame event to the keypad. Returns False if the event asks to quit """
    if event.type == pygame.QUIT:
        return False
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEYMAPPING:
            keypad.press(KEYMAPPING[event.key])
    elif event.type == pygame.KEYUP:
        if event.key in KEYMAPPING:
            keypad.release(KEYMAPPING[event.key])
    return True

def build_square_wave(frequency):
    """ One period of a square wave at frequency, in the mixer's sample format """
    sample_rate,sample_format,channels = pygame.mixer.get_init()
    period = int(round(sample_rate / frequency))
    amplitude = 2 ** (abs(sample_format) - 1) - 1
    samples = array('h', [0] * period * channels)
    for i in range(period):
        value = amplitude if i < period / 2 else -amplitude
        for channel in range(channels):
            samples[i*channels + channel] = value
    return samples

class PygameWrapper(object):
    """ Acts as the interface to our pygame UI: the window the framebuffer is drawn to,
        the keyboard that feeds the keypad, and the beeper.

        The main loop needs to call tick() on this wrapper regularly. This runs
        the pygame event loop. It will return True if processing should continue, False if a UI-level
        event cancels
    """
    def __init__(self,settings):
        pygame.mixer.pre_init(44100, -16, 1, 1024)
        pygame.init()
        pygame.display.set_caption(settings.get('caption', 'CHIP-8'))
        self.scale = settings['scale']
        self.foreground_color = settings.get('foreground_color', WHITE_COLOR)
        self.background_color = settings.get('background_color', BLACK_COLOR)
        self.screen = pygame.display.set_mode((DISPLAY_WIDTH*self.scale, DISPLAY_HEIGHT*self.scale))

        self.beep = None
        self.beeping = False
        if pygame.mixer.get_init():
            self.beep = pygame.mixer.Sound(buffer=build_square_wave(settings['beep_frequency']))
        else:
            logger.warning('No audio device, running without sound')

    def tick(self,keypad):
        """ Run tick of the event loop. Return False if the user has quit, True if keep running """
        for event in pygame.event.get():
            if not handle_event(event,keypad):
                return False
        return True

    def draw(self,framebuffer):
        self.screen.fill(self.background_color)
        for x,y in framebuffer.lit_pixels():
            self.screen.fill(self.foreground_color, pygame.Rect(x*self.scale, y*self.scale, self.scale, self.scale))
        pygame.display.flip()

    def sound(self,active):
        """ Start or stop the beep to follow the sound timer """
        if not self.beep or active == self.beeping:
            return
        if active:
            self.beep.play(-1)
        else:
            self.beep.stop()
        self.beeping = active

    def quit(self):
        pygame.quit()
