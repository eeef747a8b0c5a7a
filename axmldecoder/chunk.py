# -*- coding: UTF-8 -*-
#
# Tencent is pleased to support the open source community by making QTA available.
# Copyright (C) 2016THL A29 Limited, a Tencent company. All rights reserved.
# Licensed under the BSD 3-Clause License (the "License"); you may not use this
# file except in compliance with the License. You may obtain a copy of the License at
#
# https://opensource.org/licenses/BSD-3-Clause
#
# Unless required by applicable law or agreed to in writing, software distributed
# under the License is distributed on an "AS IS" basis, WITHOUT WARRANTIES OR CONDITIONS
# OF ANY KIND, either express or implied. See the License for the specific language
# governing permissions and limitations under the License.
#

'''资源chunk格式解析

数据由连续的chunk组成, 每个chunk以ResChunk_header开头, 所有整数均为小端序
'''

import io
import struct

from axmldecoder import AXMLError
from axmldecoder.header import StructHeaderBase
from axmldecoder.resolver import EnumAttrType
from axmldecoder.util import logger
from axmldecoder.value import ResValue

NO_INDEX = 0xFFFFFFFF


class ResChunkHeader(StructHeaderBase):
    '''ResChunk_header
    '''

    __header__ = [('type', 'H'),  # chunk的类型
                  ('head_size', 'H'),  # chunk的头部大小
                  ('size', 'I')  # chunk的大小
                  ]
    __type__ = -1

    def __init__(self, fp=None, parent=None):
        self.parent = parent
        self.offset = 0
        if self.__class__.__type__ != -1:
            self.type = self.__class__.__type__
        self.head_size = self.__class__.total_header_size
        self.size = self.head_size
        super(ResChunkHeader, self).__init__(fp)

    def __repr__(self):
        return '<%s offset=%d size=%d>' % (self.__class__.__name__, self.offset, self.size)

    def parse(self):
        self.offset = self._fp.tell()
        super(ResChunkHeader, self).parse()
        if self.head_size < ResChunkHeader.header_size or self.size < self.head_size:
            raise AXMLError('Invalid chunk at offset %d: type=0x%x header_size=%d size=%d' % (self.offset, self.type, self.head_size, self.size))

    def serialize_header(self):
        '''序列化chunk头
        '''
        if self.__class__.__type__ != -1:
            self.type = self.__class__.__type__
        self.head_size = self.__class__.total_header_size
        return super(ResChunkHeader, self).serialize_header()

    @staticmethod
    def create(fp, end, parent=None):
        '''读取fp当前位置的chunk, 读取完成后fp指向下一个chunk

        :param fp:     数据流
        :param end:    所在容器的结束位置
        :param parent: 所在的父chunk
        '''
        offset = fp.tell()
        header = ResChunkHeader(fp)
        if offset + header.size > end:
            raise AXMLError('Chunk at offset %d with size %d exceeds container end %d' % (offset, header.size, end))
        fp.seek(offset, 0)
        chunk_class = CHUNK_TYPES.get(header.type, UnknownChunk)
        if chunk_class.total_header_size > header.head_size:
            logger.debug('[ResChunkHeader] chunk type 0x%x at %d has short header %d, treat as unknown' % (header.type, offset, header.head_size))
            chunk_class = UnknownChunk
        chunk = chunk_class(fp, parent)
        fp.seek(offset + header.size, 0)
        return chunk


class UnknownChunk(ResChunkHeader):
    '''未处理的chunk类型, 只保存原始数据
    '''

    def __init__(self, *args):
        self.payload = b''
        super(UnknownChunk, self).__init__(*args)

    def parse(self):
        super(UnknownChunk, self).parse()
        self._fp.seek(self.offset + self.head_size, 0)
        self.payload = self._read(self.size - self.head_size)


class ResStringPoolHeader(ResChunkHeader):
    '''ResStringPool_header
    '''
    __header__ = [('string_count', 'I'),  # Number of strings in this pool (number of uint32_t indices that follow in the data)
                  ('style_count', 'I'),  # Number of style span arrays in the pool (number of uint32_t indices follow the string indices)
                  ('flags', 'I'),  # 0x100: String pool is encoded in UTF-8
                  ('strings_start', 'I'),  # Index from header of the string data
                  ('styles_start', 'I')  # Index from header of the style data
                  ]
    __type__ = 0x1

    UTF8_FLAG = 1 << 8

    def __init__(self, *args):
        self.string_count = 0
        self.style_count = 0
        self.flags = 0
        self.strings_start = 0
        self.styles_start = 0
        super(ResStringPoolHeader, self).__init__(*args)

    @property
    def is_utf8(self):
        return bool(self.flags & self.UTF8_FLAG)


class ResStringPoolChunk(ResStringPoolHeader):
    '''字符串池
    '''

    def __init__(self, *args):
        self.string_list = []
        super(ResStringPoolChunk, self).__init__(*args)

    def add_string(self, string):
        '''添加字符串, 返回字符串索引
        '''
        self.string_list.append(string)
        self.string_count = len(self.string_list)
        return self.string_count - 1

    def get_string(self, index):
        '''获取字符串, 索引无效时返回None
        '''
        if index == NO_INDEX or index >= len(self.string_list): return None
        return self.string_list[index]

    def _read_length(self):
        if self.is_utf8:
            length = self._read(1)[0]
            if length & 0x80:
                length = ((length & 0x7F) << 8) | self._read(1)[0]
        else:
            length = struct.unpack('<H', self._read(2))[0]
            if length & 0x8000:
                length = ((length & 0x7FFF) << 16) | struct.unpack('<H', self._read(2))[0]
        return length

    def _read_string(self, position):
        self._fp.seek(position, 0)
        if self.is_utf8:
            self._read_length()  # utf16长度
            str_len = self._read_length()
            return self._read(str_len).decode('utf8', 'replace')
        str_len = self._read_length()
        return self._read(str_len * 2).decode('utf-16-le', 'replace')

    def parse(self):
        super(ResStringPoolChunk, self).parse()
        self._fp.seek(self.offset + self.head_size, 0)
        string_offset_list = struct.unpack('<%dI' % self.string_count, self._read(4 * self.string_count))
        for string_offset in string_offset_list:
            position = self.offset + self.strings_start + string_offset
            if position >= self.offset + self.size:
                raise AXMLError('Invalid string offset: %d' % string_offset)
            self.string_list.append(self._read_string(position))

    def build_strings(self):
        '''生成UTF-16编码的字符串数据, 返回(偏移列表, 数据)
        '''
        offset_list = []
        result = []
        offset = 0
        for string in self.string_list:
            offset_list.append(offset)
            data = string.encode('utf-16-le')
            str_len = len(data) // 2
            if str_len > 0x7FFF:
                item = struct.pack('<HH', (str_len >> 16) | 0x8000, str_len & 0xFFFF)
            else:
                item = struct.pack('<H', str_len)
            item += data + b'\x00\x00'
            result.append(item)
            offset += len(item)
        return offset_list, b''.join(result)

    def serialize(self):
        '''序列化, 固定使用UTF-16编码且不包含style
        '''
        offset_list, strings = self.build_strings()
        self.flags &= ~self.UTF8_FLAG
        self.string_count = len(self.string_list)
        self.style_count = 0
        self.styles_start = 0
        self.strings_start = self.total_header_size + 4 * self.string_count
        result = struct.pack('<%dI' % len(offset_list), *offset_list) + strings
        if len(result) % 4 != 0:
            result += b'\x00' * (4 - len(result) % 4)
        self.size = self.total_header_size + len(result)
        return self.serialize_header() + result


class ResXMLResourceMapChunk(ResChunkHeader):
    '''属性名对应的资源id列表, 与字符串池中的前n个字符串一一对应
    '''
    __type__ = 0x0180

    def __init__(self, *args):
        self.res_map = []
        super(ResXMLResourceMapChunk, self).__init__(*args)

    def parse(self):
        super(ResXMLResourceMapChunk, self).parse()
        self._fp.seek(self.offset + self.head_size, 0)
        count = (self.size - self.head_size) // 4
        self.res_map = list(struct.unpack('<%dI' % count, self._read(4 * count)))
        for it in self.res_map:
            if EnumAttrType.get_name(it) is None:
                logger.debug('[%s] Attribute 0x%x not defined' % (self.__class__.__name__, it))

    def serialize(self):
        result = struct.pack('<%dI' % len(self.res_map), *self.res_map)
        self.size = self.total_header_size + len(result)
        return self.serialize_header() + result


class ResXMLTreeNode(ResChunkHeader):
    '''ResXMLTree_node
    '''

    __header__ = [('line_number', 'I'),
                  ('comment_index', 'I')  # Optional XML comment that was associated with this element; -1 if none.
                  ]

    def __init__(self, *args):
        self.line_number = 1
        self.comment_index = NO_INDEX
        super(ResXMLTreeNode, self).__init__(*args)

    def get_string(self, index):
        '''从所在XML树的字符串池中获取字符串
        '''
        if self.parent is None: return None
        return self.parent.get_string(index)

    def _parse_body(self, body_class):
        self._fp.seek(self.offset + self.head_size, 0)
        return body_class(self._fp)

    def serialize(self):
        result = self.body.serialize()
        self.size = self.total_header_size + len(result)
        return self.serialize_header() + result


class ResXMLTreeNamespaceExt(StructHeaderBase):
    '''ResXMLTree_namespaceExt
    '''

    __header__ = [('prefix_index', 'I'),
                  ('uri_index', 'I')
                  ]

    def __init__(self, *args):
        self.prefix_index = NO_INDEX
        self.uri_index = NO_INDEX
        super(ResXMLTreeNamespaceExt, self).__init__(*args)


class ResXMLNamespaceChunk(ResXMLTreeNode):
    '''命名空间chunk基类
    '''

    def __init__(self, *args):
        self.body = ResXMLTreeNamespaceExt()
        super(ResXMLNamespaceChunk, self).__init__(*args)

    def parse(self):
        super(ResXMLNamespaceChunk, self).parse()
        self.body = self._parse_body(ResXMLTreeNamespaceExt)

    @property
    def prefix(self):
        return self.get_string(self.body.prefix_index)

    @property
    def uri(self):
        return self.get_string(self.body.uri_index)


class ResXMLStartNamespaceChunk(ResXMLNamespaceChunk):
    __type__ = 0x0100


class ResXMLEndNamespaceChunk(ResXMLNamespaceChunk):
    __type__ = 0x0101


class ResXMLTreeAttrExt(StructHeaderBase):
    '''ResXMLTree_attrExt
    '''
    __header__ = [('ns_index', 'I'),
                  ('name_index', 'I'),  # String name of this node if it is an ELEMENT; the raw character data if this is a CDATA node.
                  ('attribute_start', 'H'),  # Byte offset from the start of this structure where the attributes start.
                  ('attribute_size', 'H'),  # Size of the ResXMLTree_attribute structures that follow.
                  ('attribute_count', 'H'),
                  ('id_index', 'H'),  # Index (1-based) of the "id" attribute. 0 if none.
                  ('class_index', 'H'),
                  ('style_index', 'H')
                  ]

    def __init__(self, *args):
        self.ns_index = NO_INDEX
        self.name_index = NO_INDEX
        self.attribute_start = ResXMLTreeAttrExt.header_size
        self.attribute_size = 20
        self.attribute_count = 0
        self.id_index = 0
        self.class_index = 0
        self.style_index = 0
        super(ResXMLTreeAttrExt, self).__init__(*args)


class ResXMLTreeAttribute(StructHeaderBase):
    '''ResXMLTree_attribute
    '''
    __header__ = [('ns_index', 'I'),
                  ('name_index', 'I'),  # Name of this attribute
                  ('raw_value', 'I'),  # The original raw string value of this attribute
                  ('typed_value', ResValue)
                  ]

    def __init__(self, *args):
        self.ns_index = NO_INDEX
        self.name_index = NO_INDEX
        self.raw_value = NO_INDEX
        self.typed_value = ResValue()
        self.element = None
        super(ResXMLTreeAttribute, self).__init__(*args)

    def _get_string(self, index):
        if self.element is None: return None
        return self.element.get_string(index)

    @property
    def namespace(self):
        return self._get_string(self.ns_index)

    @property
    def name(self):
        return self._get_string(self.name_index)

    @property
    def raw_string(self):
        return self._get_string(self.raw_value)


class ResXMLStartElementChunk(ResXMLTreeNode):
    '''元素开始
    '''
    __type__ = 0x0102

    def __init__(self, *args):
        self.attr_ext = ResXMLTreeAttrExt()
        self.attrs = []
        super(ResXMLStartElementChunk, self).__init__(*args)

    def parse(self):
        super(ResXMLStartElementChunk, self).parse()
        ext_offset = self.offset + self.head_size
        self.attr_ext = self._parse_body(ResXMLTreeAttrExt)
        for i in range(self.attr_ext.attribute_count):
            position = ext_offset + self.attr_ext.attribute_start + i * self.attr_ext.attribute_size
            if position + ResXMLTreeAttribute.header_size > self.offset + self.size:
                raise AXMLError('Attribute %d of element at offset %d exceeds chunk size' % (i, self.offset))
            self._fp.seek(position, 0)
            self.add_attribute(ResXMLTreeAttribute(self._fp))

    def add_attribute(self, attr):
        attr.element = self
        self.attrs.append(attr)
        self.attr_ext.attribute_count = len(self.attrs)
        return attr

    @property
    def namespace(self):
        return self.get_string(self.attr_ext.ns_index)

    @property
    def name(self):
        return self.get_string(self.attr_ext.name_index)

    @property
    def attributes(self):
        return list(self.attrs)

    def serialize(self):
        self.attr_ext.attribute_start = ResXMLTreeAttrExt.header_size
        self.attr_ext.attribute_size = ResXMLTreeAttribute.header_size
        self.attr_ext.attribute_count = len(self.attrs)
        result = self.attr_ext.serialize()
        for attr in self.attrs:
            result += attr.serialize()
        self.size = self.total_header_size + len(result)
        return self.serialize_header() + result


class ResXMLTreeEndElementExt(StructHeaderBase):
    '''ResXMLTree_endElementExt
    '''
    __header__ = [('ns_index', 'I'),
                  ('name_index', 'I')
                  ]

    def __init__(self, *args):
        self.ns_index = NO_INDEX
        self.name_index = NO_INDEX
        super(ResXMLTreeEndElementExt, self).__init__(*args)


class ResXMLEndElementChunk(ResXMLTreeNode):
    '''元素结束
    '''
    __type__ = 0x0103

    def __init__(self, *args):
        self.body = ResXMLTreeEndElementExt()
        super(ResXMLEndElementChunk, self).__init__(*args)

    def parse(self):
        super(ResXMLEndElementChunk, self).parse()
        self.body = self._parse_body(ResXMLTreeEndElementExt)

    @property
    def namespace(self):
        return self.get_string(self.body.ns_index)

    @property
    def name(self):
        return self.get_string(self.body.name_index)


class ResXMLTreeCDataExt(StructHeaderBase):
    '''ResXMLTree_cdataExt
    '''
    __header__ = [('data', 'I'),
                  ('typed_data', ResValue)
                  ]

    def __init__(self, *args):
        self.data = NO_INDEX
        self.typed_data = ResValue()
        super(ResXMLTreeCDataExt, self).__init__(*args)


class ResCDataChunk(ResXMLTreeNode):
    '''文本节点
    '''
    __type__ = 0x104

    def __init__(self, *args):
        self.body = ResXMLTreeCDataExt()
        super(ResCDataChunk, self).__init__(*args)

    def parse(self):
        super(ResCDataChunk, self).parse()
        self.body = self._parse_body(ResXMLTreeCDataExt)


class ResXMLTreeChunk(ResChunkHeader):
    '''ResXMLTree_header, XML文件的根chunk

    子chunk保存在 {偏移: chunk} 字典中
    '''
    __type__ = 0x3

    def __init__(self, *args):
        self.chunks = {}
        self._string_pool = None
        self._end = 0
        super(ResXMLTreeChunk, self).__init__(*args)

    def _put_chunk(self, chunk):
        self.chunks[chunk.offset] = chunk
        self._end = max(self._end, chunk.offset + chunk.size)
        if self._string_pool is None and isinstance(chunk, ResStringPoolChunk):
            self._string_pool = chunk

    def parse(self):
        super(ResXMLTreeChunk, self).parse()
        end = self.offset + self.size
        self._fp.seek(self.offset + self.head_size, 0)
        while self._fp.tell() < end:
            self._put_chunk(ResChunkHeader.create(self._fp, end, self))

    @property
    def string_pool(self):
        '''第一个字符串池chunk
        '''
        return self._string_pool

    def get_string(self, index):
        if self._string_pool is None: return None
        return self._string_pool.get_string(index)

    def add_chunk(self, chunk):
        '''追加子chunk, 偏移在序列化时重新计算
        '''
        chunk.parent = self
        chunk.offset = max(self.total_header_size, self._end)
        chunk.size = len(chunk.serialize())
        self._put_chunk(chunk)
        return chunk

    def serialize(self):
        chunks = [self.chunks[offset] for offset in sorted(self.chunks)]
        self.chunks = {}
        self._end = 0
        result = []
        offset = self.total_header_size
        for chunk in chunks:
            chunk.offset = offset
            data = chunk.serialize()
            result.append(data)
            offset += len(data)
            self._put_chunk(chunk)
        self._end = offset
        body = b''.join(result)
        self.size = self.total_header_size + len(body)
        return self.serialize_header() + body


CHUNK_TYPES = dict((cls.__type__, cls) for cls in (
    ResStringPoolChunk,
    ResXMLTreeChunk,
    ResXMLStartNamespaceChunk,
    ResXMLEndNamespaceChunk,
    ResXMLStartElementChunk,
    ResXMLEndElementChunk,
    ResCDataChunk,
    ResXMLResourceMapChunk,
))


def parse_chunks(data):
    '''将数据解析为顶层chunk列表

    :param data: 二进制数据
    :type  data: bytes
    :returns: list
    '''
    fp = io.BytesIO(data)
    end = len(data)
    chunks = []
    while fp.tell() < end:
        chunks.append(ResChunkHeader.create(fp, end))
    return chunks
