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

'''Res_value类型值的格式化

输出需要与aapt dump的结果逐字节一致
'''

import decimal
import math
import re
import struct

from axmldecoder.header import StructHeaderBase
from axmldecoder.resolver import NO_RESOLUTION


class EnumResValueType(object):
    '''ResValue枚举类型
    '''
    TYPE_NULL = 0x00
    TYPE_REFERENCE = 0x01
    TYPE_ATTRIBUTE = 0x02
    TYPE_STRING = 0x03
    TYPE_FLOAT = 0x04  # The 'data' holds a single-precision floating point number.
    TYPE_DIMENSION = 0x05
    TYPE_FRACTION = 0x06
    TYPE_DYNAMIC_REFERENCE = 0x07
    TYPE_DYNAMIC_ATTRIBUTE = 0x08
    TYPE_INT_DEC = 0x10
    TYPE_INT_HEX = 0x11
    TYPE_INT_BOOLEAN = 0x12  # The 'data' is either 0 or 1, for input "false" or "true" respectively.
    TYPE_INT_COLOR_ARGB8 = 0x1c
    TYPE_INT_COLOR_RGB8 = 0x1d
    TYPE_INT_COLOR_ARGB4 = 0x1e
    TYPE_INT_COLOR_RGB4 = 0x1f


DIMENSION_UNITS = ('px', 'dp', 'sp', 'pt', 'in', 'mm')
FRACTION_UNITS = ('%', '%p')
UNKNOWN_UNIT = '???'
RADIX_SHIFTS = (23, 16, 8, 0)
COMPLEX_RADIX_SHIFT = 4
COMPLEX_RADIX_MASK = 0x3
COMPLEX_MANTISSA_SHIFT = 8
COMPLEX_MANTISSA_MASK = 0xFFFFFF
COMPLEX_UNIT_SHIFT = 0
COMPLEX_UNIT_MASK = 0xF
MAX_FRACTION_DIGITS = 6

_DECIMAL_QUANTUM = decimal.Decimal(1).scaleb(-MAX_FRACTION_DIGITS)


def int_bits_to_float(data):
    '''将32位整数按IEEE-754单精度解释为浮点数
    '''
    return struct.unpack('<f', struct.pack('<I', data & 0xFFFFFFFF))[0]


def float_to_int_bits(val):
    return struct.unpack('<I', struct.pack('<f', val))[0]


def to_float32(val):
    '''按单精度舍入
    '''
    return struct.unpack('<f', struct.pack('<f', val))[0]


def to_signed32(data):
    data &= 0xFFFFFFFF
    if data & 0x80000000:
        return data - (1 << 32)
    return data


def format_decimal(val):
    '''格式化浮点数: 最多6位小数, 去掉末尾的0, 四舍六入五成双, 不使用科学计数法
    '''
    if math.isnan(val):
        return 'NaN'
    if math.isinf(val):
        return '-∞' if val < 0 else '∞'
    # 使用最短表示的十进制数字, 避免单精度转换引入的噪声
    context = decimal.Context(prec=64, rounding=decimal.ROUND_HALF_EVEN)
    number = context.quantize(decimal.Decimal(repr(val)), _DECIMAL_QUANTUM)
    text = '{:f}'.format(number)
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def complex_to_string(complex_value, is_fraction):
    '''将complex类型数据转换为"<数值><单位>"形式

    :param complex_value: 32位complex数据
    :type  complex_value: int
    :param is_fraction:   是否为fraction类型, fraction以百分数显示
    :type  is_fraction:   bool
    '''
    complex_value &= 0xFFFFFFFF
    radix = (complex_value >> COMPLEX_RADIX_SHIFT) & COMPLEX_RADIX_MASK
    mantissa = ((complex_value >> COMPLEX_MANTISSA_SHIFT) & COMPLEX_MANTISSA_MASK) << RADIX_SHIFTS[radix]
    value = to_float32(mantissa * (1.0 / (1 << 23)))
    if is_fraction:
        # aapt中存储的是小数, 显示为百分数
        value = to_float32(value * 100.0)
    unit_type = (complex_value >> COMPLEX_UNIT_SHIFT) & COMPLEX_UNIT_MASK
    unit_values = FRACTION_UNITS if is_fraction else DIMENSION_UNITS
    units = unit_values[unit_type] if unit_type < len(unit_values) else UNKNOWN_UNIT
    return '%s%s' % (format_decimal(value), units)


def string_to_complex(val, units, is_fraction=False):
    '''complex_to_string的逆过程, 选择精度最高的radix

    mantissa最高位为符号位, 只使用低23位
    '''
    if is_fraction:
        val /= 100.0
    if val < 0:
        raise ValueError('Negative complex value %r is not supported' % val)
    for radix in (3, 2, 1, 0):
        if val < (1 << RADIX_SHIFTS[radix]):
            break
    else:
        raise ValueError('Complex value %r out of range' % val)
    mantissa = int(round(val * (1 << (23 - RADIX_SHIFTS[radix]))))
    mantissa = min(mantissa, COMPLEX_MANTISSA_MASK >> 1)
    unit_values = FRACTION_UNITS if is_fraction else DIMENSION_UNITS
    return (mantissa << COMPLEX_MANTISSA_SHIFT) | (radix << COMPLEX_RADIX_SHIFT) | unit_values.index(units)


class ResValue(StructHeaderBase):
    '''Res_value
    '''
    __header__ = [('size', 'H'),  # Number of bytes in this structure.
                  ('res0', 'B'),  # Always set to 0.
                  ('data_type', 'B'),
                  ('data', 'I'),  # The data for this item, as interpreted according to dataType.
                  ]

    def __init__(self, fp=None, data_type=EnumResValueType.TYPE_NULL, data=0):
        self.size = 8
        self.res0 = 0
        self.data_type = data_type
        self.data = data
        super(ResValue, self).__init__(fp)

    def __repr__(self):
        return '<ResValue type=0x%02x data=0x%08x>' % (self.data_type, self.data)

    @staticmethod
    def convert_from(val):
        '''根据文本val生成ResValue对象, 字符串类型的data由调用方填充
        '''
        rv = ResValue()
        ref_pattern = re.compile(r'^@0x[0-9a-fA-F]+$')
        hex_pattern = re.compile(r'^0x[0-9a-fA-F]+$')
        dec_pattern = re.compile(r'^-?\d+$')
        float_pattern = re.compile(r'^-?\d+\.\d+f$')
        color_pattern = re.compile(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
        complex_pattern = re.compile(r'^(\d+(?:\.\d+)?)(px|dp|sp|pt|in|mm|%p|%)$')

        if val == '@null':
            rv.data_type = EnumResValueType.TYPE_REFERENCE
            rv.data = 0
        elif val == '@empty':
            rv.data_type = EnumResValueType.TYPE_NULL
            rv.data = 1
        elif ref_pattern.match(val):
            rv.data_type = EnumResValueType.TYPE_REFERENCE
            rv.data = int(val[1:], 16) & 0xFFFFFFFF
        elif hex_pattern.match(val):
            rv.data_type = EnumResValueType.TYPE_INT_HEX
            rv.data = int(val, 16) & 0xFFFFFFFF
        elif dec_pattern.match(val):
            rv.data_type = EnumResValueType.TYPE_INT_DEC
            rv.data = int(val) & 0xFFFFFFFF
        elif float_pattern.match(val):
            rv.data_type = EnumResValueType.TYPE_FLOAT
            rv.set_float(float(val[:-1]))
        elif val in ('true', 'false'):
            rv.data_type = EnumResValueType.TYPE_INT_BOOLEAN
            rv.data = 0 if val == 'false' else 0xFFFFFFFF
        elif color_pattern.match(val):
            digits = val[1:]
            rv.data_type = {
                3: EnumResValueType.TYPE_INT_COLOR_RGB4,
                4: EnumResValueType.TYPE_INT_COLOR_ARGB4,
                6: EnumResValueType.TYPE_INT_COLOR_RGB8,
                8: EnumResValueType.TYPE_INT_COLOR_ARGB8,
            }[len(digits)]
            rv.data = int(digits, 16)
        elif complex_pattern.match(val):
            number, units = complex_pattern.match(val).groups()
            is_fraction = units in FRACTION_UNITS
            rv.data_type = EnumResValueType.TYPE_FRACTION if is_fraction else EnumResValueType.TYPE_DIMENSION
            rv.data = string_to_complex(float(number), units, is_fraction)
        else:
            rv.data_type = EnumResValueType.TYPE_STRING
            rv.data = 0xFFFFFFFF  # 上层修改该值
        return rv

    def get_float(self):
        '''获取浮点数
        '''
        return int_bits_to_float(self.data)

    def set_float(self, val):
        '''设置浮点数
        '''
        self.data = float_to_int_bits(val)

    def format_value(self, string_pool=None, resolver=NO_RESOLUTION):
        return format_value(self, string_pool, resolver)


def format_value(res_value, string_pool=None, resolver=NO_RESOLUTION):
    '''将Res_value格式化为源码xml中的写法

    :param res_value:   类型值
    :type  res_value:   ResValue
    :param string_pool: 字符串池, 可以为None
    :type  string_pool: ResStringPoolChunk
    :param resolver:    资源id解析器
    :type  resolver:    ResourceIdResolver
    '''
    if resolver is None: resolver = NO_RESOLUTION
    data = res_value.data & 0xFFFFFFFF
    data_type = res_value.data_type

    if data_type == EnumResValueType.TYPE_NULL:
        return '@empty' if data == 1 else '@null'
    elif data_type in (EnumResValueType.TYPE_REFERENCE, EnumResValueType.TYPE_DYNAMIC_REFERENCE):
        if data == 0:
            return '@null'
        return resolver.resolve(data)
    elif data_type in (EnumResValueType.TYPE_ATTRIBUTE, EnumResValueType.TYPE_DYNAMIC_ATTRIBUTE):
        name = resolver.resolve(data)
        if name.startswith('@'):
            name = name[1:]
        return '?' + name
    elif data_type == EnumResValueType.TYPE_STRING:
        if string_pool is not None and data < string_pool.string_count:
            return string_pool.get_string(data)
        return '@string/0x%x' % data
    elif data_type == EnumResValueType.TYPE_DIMENSION:
        return complex_to_string(data, False)
    elif data_type == EnumResValueType.TYPE_FRACTION:
        return complex_to_string(data, True)
    elif data_type == EnumResValueType.TYPE_FLOAT:
        return format_decimal(res_value.get_float())
    elif data_type == EnumResValueType.TYPE_INT_DEC:
        return str(to_signed32(data))
    elif data_type == EnumResValueType.TYPE_INT_HEX:
        return '0x%x' % data
    elif data_type == EnumResValueType.TYPE_INT_BOOLEAN:
        return 'true' if data != 0 else 'false'
    elif data_type == EnumResValueType.TYPE_INT_COLOR_ARGB8:
        return '#%08X' % data
    elif data_type == EnumResValueType.TYPE_INT_COLOR_RGB8:
        return '#%06X' % (data & 0xFFFFFF)
    elif data_type == EnumResValueType.TYPE_INT_COLOR_ARGB4:
        return '#%04X' % (data & 0xFFFF)
    elif data_type == EnumResValueType.TYPE_INT_COLOR_RGB4:
        return '#%03X' % (data & 0xFFF)
    return '@res/0x%x' % data
