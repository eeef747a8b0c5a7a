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

'''结构体头部基类

子类通过 __header__ 声明字段列表, 每一项为 (字段名, struct格式) 或 (字段名, 嵌套结构体类)
'''

import struct

from axmldecoder import AXMLError


class HeaderMetaClass(type):
    '''元类, 根据 __header__ 计算结构体格式与大小
    '''

    def __init__(cls, name, bases, attrd):
        header_format = '>' if cls.big_ending else '<'
        for _, fmt in cls.__header__:
            if not isinstance(fmt, str) and issubclass(fmt, StructHeaderBase):
                fmt = fmt.header_format[1:]
            header_format += fmt

        cls.header_format = header_format
        cls.header_size = struct.calcsize(header_format)
        total_header_size = 0
        c = cls
        while c != object:
            if c.__base__ != object and c.__header__ != c.__base__.__header__:
                total_header_size += c.header_size
            c = c.__base__
        cls.total_header_size = total_header_size
        super(HeaderMetaClass, cls).__init__(name, bases, attrd)


class StructHeaderBase(object, metaclass=HeaderMetaClass):
    '''结构体头基类
    '''
    big_ending = False
    __header__ = []

    def __init__(self, fp=None):
        self._fp = fp
        if self._fp: self.parse()

    def _read(self, size):
        '''从数据流中读取指定长度, 长度不足时抛出AXMLError
        '''
        data = self._fp.read(size)
        if len(data) != size:
            raise AXMLError('Unexpected end of data at offset %d: need %d bytes, got %d' % (self._fp.tell() - len(data), size, len(data)))
        return data

    def _set_values(self, cls, items):
        offset = 0
        for i, (name, fmt) in enumerate(cls.__header__):
            if not isinstance(fmt, str) and issubclass(fmt, StructHeaderBase):
                count = len(fmt.header_format) - 1
                obj = fmt()
                obj._set_values(fmt, items[i + offset:i + offset + count])
                offset += count - 1
                setattr(self, name, obj)
            else:
                setattr(self, name, items[i + offset])

    def parse(self):
        '''解析结构体头
        '''
        cls_list = []
        cls = self.__class__
        while cls != StructHeaderBase:
            cls_list.insert(0, cls)
            cls = cls.__base__

        for cls in cls_list:
            if not cls.__header__ or cls.__header__ == cls.__base__.__header__: continue
            header_data = self._read(cls.header_size)
            items = struct.unpack_from(cls.header_format, header_data)
            self._set_values(cls, items)

    def get_values(self, cls=None):
        values = []
        if cls == None: cls = self.__class__
        for name, _ in cls.__header__:
            val = getattr(self, name)
            if isinstance(val, StructHeaderBase):
                values.extend(val.get_values())
            else:
                values.append(val)
        return values

    def serialize_header(self):
        '''序列化结构体头
        '''
        result = b''
        cls = self.__class__
        while cls != StructHeaderBase:
            if cls.__header__ != cls.__base__.__header__:
                values = tuple(self.get_values(cls))
                try:
                    result = struct.pack(cls.header_format, *values) + result
                except struct.error:
                    raise AXMLError('Params not match %s %s' % (cls.header_format, values))
            cls = cls.__base__
        return result

    def serialize(self):
        '''序列化
        '''
        return self.serialize_header()

    def dump_header(self, indent=0):
        '''dump结构体头, 包含父类中声明的字段
        '''
        result = []
        cls_list = []
        cls = self.__class__
        while cls != StructHeaderBase:
            if cls.__header__ != cls.__base__.__header__:
                cls_list.insert(0, cls)
            cls = cls.__base__
        for cls in cls_list:
            for name, _ in cls.__header__:
                val = getattr(self, name)
                if isinstance(val, StructHeaderBase):
                    val = '\n' + val.dump_header(indent + 1)
                elif isinstance(val, int):
                    val = '0x%X' % val
                result.append('%s%s: %s' % (' ' * indent * 4, name, val))
        return '\n'.join(result)
