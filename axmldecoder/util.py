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

'''公共函数及日志
'''

import logging
import os
import sys

LOG_LEVEL_ENV = 'AXMLDECODER_LOG_LEVEL'


def get_log_level():
    '''屏幕日志级别, 优先使用环境变量[AXMLDECODER_LOG_LEVEL], 默认为WARNING
    '''
    level = os.environ.get(LOG_LEVEL_ENV, 'WARNING').strip().upper()
    if level.isdigit():
        return int(level)
    if not isinstance(logging.getLevelName(level), int):
        return logging.WARNING
    return logging.getLevelName(level)


logger = logging.getLogger('axmldecoder')
logger.setLevel(logging.DEBUG)
if not logger.handlers:
    logger.addHandler(logging.StreamHandler(sys.stderr))
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(message)s')  # %(filename)s %(funcName)s
    logger.handlers[0].setFormatter(fmt)
    logger.handlers[0].setLevel(get_log_level())


def set_log_level(level):
    '''设置屏幕日志级别
    '''
    for handler in logger.handlers:
        handler.setLevel(level)
