"""
Write one record holding every supported S7 type and read it back.

The layout of the record is known to both sides, the stream only carries
the values.
"""

import io
import logging
from datetime import datetime, timedelta

from s7stream import DateTimeKind, S7BinaryReader, S7BinaryWriter, to_hex_string

logging.basicConfig(level=logging.DEBUG)

stream = io.BytesIO()
writer = S7BinaryWriter(stream, leave_open=True)

writer.write_word(0xBEEF)
writer.write_int(-12)
writer.write_dint(123456)
writer.write_udint(4294967295)
writer.write_real(12.5)
writer.write_lreal(12345.12345)
writer.write_bool(True)
writer.write_bool(False)
writer.write_string("hello world", 20)
writer.write_time(timedelta(hours=1, milliseconds=250))
writer.write_date_time(datetime(2024, 3, 27, 12, 34, 56, 780000))

print(f"{writer.pending} bytes staged, {len(stream.getvalue())} bytes on the stream")
writer.flush()
print(f"{writer.pending} bytes staged, {len(stream.getvalue())} bytes on the stream")

stream.seek(0)
reader = S7BinaryReader(stream)
print(to_hex_string(reader.read_word()))
print(reader.read_int(), reader.read_dint(), reader.read_udint())
print(reader.read_real(), reader.read_lreal())
print(reader.read_bool(), reader.read_bool())
print(reader.read_string(20))
print(reader.read_time())
print(reader.read_date_time(DateTimeKind.UTC))
reader.close()
