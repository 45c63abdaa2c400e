#
# See http://devernay.free.fr/hacks/chip8/C8TECH10.HTM for a definition of the CHIP-8
#
# See DESIGN.md for a summary of architecture
#
