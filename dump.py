#
# Dump a CHIP-8 program: disassembly and raw memory
#

import sys
import argparse
from chip8.interpreter import Program,Interpreter,ProgramFileException,PROGRAM_START
from chip8.instructions import disassemble

def load(path):
    with open(path,'rb') as f:
        interpreter = Interpreter(Program(f.read()))
    try:
        interpreter.reset()
    except ProgramFileException as e:
        print('Unable to load program. %s' % e)
        return None
    return interpreter

def dump(path,raw=False,start_address=PROGRAM_START):
    interpreter = load(path)
    if not interpreter:
        return 1

    end_address = PROGRAM_START + len(interpreter.program.data)
    # Odd length programs end in a lone byte, which is listed by the raw dump only
    print('Program size:             %d bytes' % len(interpreter.program.data))
    print('Loaded at:                0x%04x-0x%04x' % (PROGRAM_START,end_address-1))
    print('')

    print('Disassembly\n-----------\n')
    for address,description in disassemble(interpreter.memory,start_address,end_address):
        print('%04x: %s' % (address,description))
    print('')

    if raw:
        print('Raw memory\n----------\n')
        for line in interpreter.memory.dump(start_address=PROGRAM_START,length=end_address-PROGRAM_START):
            print(line)

def main(*args):
    parser = argparse.ArgumentParser(description='Disassemble a CHIP-8 program')
    parser.add_argument('program',help='Program file to dump')
    parser.add_argument('--raw',help='Also print a hex dump',required=False,action='store_true')
    parser.add_argument('--start_address',help='Address (hex) to start disassembling at. Use an odd address for programs with unaligned code',
                        required=False,default='%x' % PROGRAM_START)
    data = parser.parse_args(args or None)

    return dump(data.program,raw=data.raw,start_address=int(data.start_address,16))

if __name__ == "__main__":
    sys.exit(main())
