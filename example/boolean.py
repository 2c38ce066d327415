"""
So how are BOOL values packed?

1) Consecutive BOOLs share one byte, the first BOOL is the lowest bit.
2) After eight BOOLs the next byte is started.
3) As soon as something else than a BOOL follows, or the structure ends,
   the byte is closed and a 0x00 stop byte is added.
4) The reader mirrors this, so fields have to be read in the order they
   were written.

Any binary stream works, for a TCP connection to a PLC use
``sock.makefile("rwb")`` and keep a reader and a writer on it.
"""

import io

from s7stream import S7BinaryReader, S7BinaryWriter

stream = io.BytesIO()

with S7BinaryWriter(stream, leave_open=True) as writer:
    for i in range(10):
        writer.write_bool(i % 3 == 0)
    writer.write_int(127)
    # nothing has reached the stream yet, closing the writer flushes the record

print(stream.getvalue().hex(" "))  # 49 02 00 00 7f

stream.seek(0)
with S7BinaryReader(stream) as reader:
    print([reader.read_bool() for _ in range(10)])
    print(reader.read_int())
