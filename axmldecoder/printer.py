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

'''根据chunk重建文本XML
'''

from xml.sax.saxutils import escape

from axmldecoder.dispatcher import XmlChunkHandler
from axmldecoder.resolver import NO_RESOLUTION
from axmldecoder.value import format_value

XMLNS = 'xmlns'


class EnumConstruct(object):
    '''最后输出的内容类型
    '''
    NULL = 0
    START_TAG = 1
    ATTRIBUTE = 2
    END_TAG = 3


class XmlBuilder(object):
    '''逐个标签生成xml文本

    每个属性单独一行, 没有子节点的元素使用 ' />' 闭合
    '''
    indent = ' ' * 4

    def __init__(self):
        self._lines = []
        self._tag_stack = []
        self._last_construct = EnumConstruct.NULL

    @property
    def depth(self):
        return len(self._tag_stack)

    def _close_start_tag(self):
        if self._last_construct in (EnumConstruct.START_TAG, EnumConstruct.ATTRIBUTE):
            self._lines.append('>\n')

    def start_tag(self, name):
        self._close_start_tag()
        self._lines.append('%s<%s' % (self.indent * self.depth, name))
        self._tag_stack.append(name)
        self._last_construct = EnumConstruct.START_TAG
        return self

    def attribute(self, prefix, name, value):
        if prefix:
            name = '%s:%s' % (prefix, name)
        value = escape(value or '', {'"': '&quot;', "'": '&apos;'})
        self._lines.append('\n%s%s="%s"' % (self.indent * self.depth, name, value))
        self._last_construct = EnumConstruct.ATTRIBUTE
        return self

    def end_tag(self, name):
        '''关闭最内层的标签, 不检查标签名是否匹配
        '''
        if self._tag_stack:
            self._tag_stack.pop()
        if self._last_construct in (EnumConstruct.START_TAG, EnumConstruct.ATTRIBUTE):
            self._lines.append(' />\n')
        else:
            self._lines.append('%s</%s>\n' % (self.indent * self.depth, name))
        self._last_construct = EnumConstruct.END_TAG
        return self

    def __str__(self):
        return ''.join(self._lines)


class XmlPrinter(XmlChunkHandler):
    '''将chunk还原为xml文本

    命名空间声明统一输出到第一个元素上, end_namespace不会移除已声明的命名空间
    '''

    def __init__(self, resolver=NO_RESOLUTION):
        self._builder = XmlBuilder()
        self._namespaces = {}  # uri: prefix
        self._namespaces_added = False
        self._string_pool = None
        self._resolver = resolver or NO_RESOLUTION

    def string_pool(self, chunk):
        self._string_pool = chunk

    def start_namespace(self, chunk):
        # 先收集所有的命名空间, 在第一个元素中输出
        self._namespaces[chunk.uri] = chunk.prefix

    def start_element(self, chunk):
        self._builder.start_tag(chunk.name)

        if not self._namespaces_added and self._namespaces:
            self._namespaces_added = True
            for uri, prefix in self._namespaces.items():
                if prefix:
                    self._builder.attribute(XMLNS, prefix, uri)
                else:
                    self._builder.attribute('', XMLNS, uri)

        for attr in chunk.attributes:
            prefix = self._namespaces.get(attr.namespace) or ''
            self._builder.attribute(prefix, attr.name, self._get_value(attr))

    def end_element(self, chunk):
        self._builder.end_tag(chunk.name)

    def _get_value(self, attr):
        raw_value = attr.raw_string
        if raw_value:
            return raw_value
        return format_value(attr.typed_value, self._string_pool, self._resolver)

    def get_reconstructed_xml(self):
        return str(self._builder)
