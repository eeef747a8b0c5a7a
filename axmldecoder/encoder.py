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

'''根据文本xml生成AXML数据
'''

import xml.dom.minidom

from axmldecoder.chunk import (NO_INDEX, ResStringPoolChunk, ResXMLResourceMapChunk, ResXMLTreeChunk,
                               ResXMLStartNamespaceChunk, ResXMLEndNamespaceChunk, ResXMLStartElementChunk,
                               ResXMLEndElementChunk, ResXMLTreeAttribute)
from axmldecoder.resolver import EnumAttrType
from axmldecoder.value import EnumResValueType, ResValue


class AXMLWriter(object):
    '''AXML生成器
    '''

    def __init__(self):
        self.string_pool_chunk = ResStringPoolChunk()
        self.res_map_chunk = ResXMLResourceMapChunk()
        self.start_ns_chunks = []
        self.end_ns_chunks = []
        self.elem_chunk_list = []
        self._string_index = {}  # string: index

    def _get_string_index(self, s):
        if s not in self._string_index:
            self._string_index[s] = self.string_pool_chunk.add_string(s)
        return self._string_index[s]

    @staticmethod
    def from_xml(xml_text):
        '''根据xml文本生成AXMLWriter对象

        :param xml_text: xml文本或minidom文档对象
        '''
        if isinstance(xml_text, (str, bytes)):
            dom = xml.dom.minidom.parseString(xml_text)
        else:
            dom = xml_text

        obj = AXMLWriter()
        root = dom.documentElement
        ns_map = {}  # prefix: uri
        for name, val in root.attributes.items():
            if name.startswith('xmlns:'):
                ns_map[name[len('xmlns:'):]] = val

        # 带资源id的属性名需要放在字符串池的最前面, 与resource map一一对应
        res_attrs = set()
        for node in dom.getElementsByTagName('*'):
            for name in node.attributes.keys():
                if ':' not in name: continue
                prefix, local_name = name.split(':', 1)
                if prefix in ns_map and EnumAttrType.get_value(local_name) != 0xFFFFFFFF:
                    res_attrs.add(local_name)
        for local_name in sorted(res_attrs, key=EnumAttrType.get_value):
            obj._get_string_index(local_name)
            obj.res_map_chunk.res_map.append(EnumAttrType.get_value(local_name))

        for prefix, uri in ns_map.items():
            start_ns_chunk = ResXMLStartNamespaceChunk()
            start_ns_chunk.body.prefix_index = obj._get_string_index(prefix)
            start_ns_chunk.body.uri_index = obj._get_string_index(uri)
            obj.start_ns_chunks.append(start_ns_chunk)

            end_ns_chunk = ResXMLEndNamespaceChunk()
            end_ns_chunk.body.prefix_index = start_ns_chunk.body.prefix_index
            end_ns_chunk.body.uri_index = start_ns_chunk.body.uri_index
            obj.end_ns_chunks.insert(0, end_ns_chunk)

        def _walk_dom_tree(dom_node):
            elem_chunk_list = []
            for node in dom_node.childNodes:
                if node.nodeType != node.ELEMENT_NODE: continue

                start_elem_chunk = ResXMLStartElementChunk()
                start_elem_chunk.attr_ext.name_index = obj._get_string_index(node.tagName)

                for name, val in node.attributes.items():
                    if name == 'xmlns' or name.startswith('xmlns:'): continue
                    attr = ResXMLTreeAttribute()
                    prefix = name.split(':', 1)[0] if ':' in name else None
                    if prefix in ns_map:
                        name = name[len(prefix) + 1:]
                        attr.ns_index = obj._get_string_index(ns_map[prefix])
                    attr.name_index = obj._get_string_index(name)
                    attr.typed_value = ResValue.convert_from(val)
                    if attr.typed_value.data_type == EnumResValueType.TYPE_STRING:
                        attr.typed_value.data = obj._get_string_index(val)
                        attr.raw_value = attr.typed_value.data
                    else:
                        attr.raw_value = NO_INDEX
                    start_elem_chunk.add_attribute(attr)

                end_elem_chunk = ResXMLEndElementChunk()
                end_elem_chunk.body.ns_index = start_elem_chunk.attr_ext.ns_index
                end_elem_chunk.body.name_index = start_elem_chunk.attr_ext.name_index

                elem_chunk_list.append(start_elem_chunk)
                elem_chunk_list.extend(_walk_dom_tree(node))
                elem_chunk_list.append(end_elem_chunk)

            return elem_chunk_list

        obj.elem_chunk_list = _walk_dom_tree(dom)
        for line_number, chunk in enumerate(obj.elem_chunk_list):
            chunk.line_number = line_number + 1
        return obj

    def to_chunk(self):
        '''生成XML树chunk
        '''
        tree_chunk = ResXMLTreeChunk()
        tree_chunk.add_chunk(self.string_pool_chunk)
        if self.res_map_chunk.res_map:
            tree_chunk.add_chunk(self.res_map_chunk)
        for chunk in self.start_ns_chunks + self.elem_chunk_list + self.end_ns_chunks:
            tree_chunk.add_chunk(chunk)
        return tree_chunk

    def to_bytes(self):
        '''序列化
        '''
        return self.to_chunk().serialize()

    def save(self, save_path):
        '''保存到文件
        '''
        with open(save_path, 'wb') as f:
            f.write(self.to_bytes())
