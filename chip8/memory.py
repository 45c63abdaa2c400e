""" Support classes around working with virtual "memory" in the CHIP-8 VM """

MEMORY_SIZE = 0x1000   # 4K, the common size for CHIP-8 systems

class MemoryException(Exception):
    pass

class MemoryOutOfRangeException(MemoryException):
    """ Thrown when an address falls outside of memory """
    def __init__(self,address,size=MEMORY_SIZE):
        super(MemoryOutOfRangeException,self).__init__('Address 0x%04x outside of memory (size 0x%04x)' % (address,size))
        self.address = address

class Memory(object):
    """ Flat, zero-initialized byte store. Every access is bounds checked """
    def __init__(self, size=MEMORY_SIZE):
        self._raw_data = bytearray(size)

    def _check_address(self,idx):
        if idx < 0 or idx >= len(self._raw_data):
            raise MemoryOutOfRangeException(idx,len(self._raw_data))

    def read(self,idx):
        """ Return byte at the provided address """
        self._check_address(idx)
        return self._raw_data[idx]

    def write(self,idx,val):
        """ Set byte at provided address """
        self._check_address(idx)
        if val < 0 or val > 0xFF:
            raise MemoryException('Value %d written to 0x%04x is not a byte' % (val,idx))
        self._raw_data[idx] = val

    def word(self, idx):
        """ Return the big-endian word at the provided address """
        self._check_address(idx+1)
        return (self.read(idx) << 8) | self.read(idx+1)

    def block(self,idx,length):
        """ Return length bytes starting at idx. Raises if any of them is out of range """
        if length <= 0:
            return bytes()
        self._check_address(idx)
        self._check_address(idx+length-1)
        return bytes(self._raw_data[idx:idx+length])

    def load_block(self,data,start_address):
        """ Copy data into memory at start_address. Nothing is written if the data does not fit """
        data = bytes(data)
        if not data:
            return
        self._check_address(start_address)
        self._check_address(start_address+len(data)-1)
        self._raw_data[start_address:start_address+len(data)] = data

    def clear(self):
        self._raw_data[:] = bytearray(len(self._raw_data))

    def __len__(self):
        return len(self._raw_data)

    def __getitem__(self,idx):
        return self.read(idx)

    def __setitem__(self,idx,val):
        self.write(idx,val)

    def dump(self, width=16,start_address=0,length=None):
        """ Return memory as a list of hex dump lines """
        if length is None:
            length = len(self) - start_address
        lines = []
        counter = 0
        while counter < length:
            if width + counter > length:
                width = length-counter
            row = ['%.2x' % x for x in self.block(start_address+counter,width)]
            lines.append('%s %s' % ('%.4x' % (counter+start_address), ' '.join(row)))
            counter += width
        return lines
