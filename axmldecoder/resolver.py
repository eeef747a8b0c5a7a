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

'''资源id解析

将资源id解析为 @[<package>:]<type>/<name> 形式的字符串
'''


class EnumAttrType(object):
    '''These are attribute resource constants for the platform, as found in android.R.attr
    '''
    THEME_ATTR = 'theme', 0x1010000
    LABEL_ATTR = 'label', 0x01010001
    ICON_ATTR = 'icon', 0x01010002
    NAME_ATTR = 'name', 0x01010003
    PERMISSION_ATTR = 'permission', 0x01010006
    READ_PERMISSION = 'readPermission', 0x1010007
    WRITE_PERMISSION = 'writePermission', 0x1010008
    PROTECTION_LEVEL_ATTR = 'protectionLevel', 0x1010009
    PERMISSION_GROUP_ATTR = 'permissionGroup', 0x101000a
    PERSISTENT = 'persistent', 0x101000d
    ENABLED_ATTR = 'enabled', 0x101000e
    DEBUGGABLE_ATTR = 'debuggable', 0x0101000f
    EXPORTED_ATTR = 'exported', 0x1010010
    PROCESS_ATTR = 'process', 0x1010011
    TASK_AFFINITY_ATTR = 'taskAffinity', 0x1010012
    MULTI_PROCESS_ATTR = 'multiprocess', 0x1010013
    CLEAR_TASK_ON_LAUNCH_ATTR = 'clearTaskOnLaunch', 0x1010015
    EXCLUDE_FROM_RECENTS_ATTR = 'excludeFromRecents', 0x1010017
    AUTHORITIES_ATTR = 'authorities', 0x1010018
    INIT_ORDER = 'initOrder', 0x101001a
    GRANT_URI_PERMISSIONS_ATTR = 'grantUriPermissions', 0x101001b
    PRIORITY_ATTR = 'priority', 0x101001c
    LAUNCH_MODE_ATTR = 'launchMode', 0x101001d
    SCREEN_ORIENTATION_ATTR = 'screenOrientation', 0x0101001e
    CONFIG_CHANGES_ATTR = 'configChanges', 0x101001f
    VALUE_ATTR = 'value', 0x1010024
    RESOURCE_ATTR = 'resource', 0x01010025
    MIME_TYPE_ATTR = 'mimeType', 0x1010026
    SCHEME_ATTR = 'scheme', 0x1010027
    HOST_ATTR = 'host', 0x1010028
    PATH_PREFIX_ATTR = 'pathPrefix', 0x101002b
    WINDOW_ANIMATION_STYLE = 'windowAnimationStyle', 0x10100ae
    ID_ATTR = 'id', 0x010100d0
    LAYOUT_WIDTH_ATTR = 'layout_width', 0x010100f4
    LAYOUT_HEIGHT_ATTR = 'layout_height', 0x010100f5
    TARGET_ACTIVITY_ATRR = 'targetActivity', 0x1010202
    ALWAYS_RETAIN_TASK_STATE_ATTR = 'alwaysRetainTaskState', 0x1010203
    ALLOW_TASK_REPARENTING_ATTR = 'allowTaskReparenting', 0x1010204
    MIN_SDK_VERSION_ATTR = 'minSdkVersion', 0x0101020c
    KEEO_SCREEN_ON_ATTR = 'keepScreenOn', 0x1010216
    VERSION_CODE_ATTR = 'versionCode', 0x0101021b
    VERSION_NAME_ATTR = 'versionName', 0x0101021c
    REQ_TOUCH_SCREEN_ATTR = 'reqTouchScreen', 0x01010227
    REQ_KEYBOARD_TYPE_ATTR = 'reqKeyboardType', 0x01010228
    REQ_HARD_KEYBOARD_ATTR = 'reqHardKeyboard', 0x01010229
    REQ_NAVIGATION_ATTR = 'reqNavigation', 0x0101022a
    WINDOW_SOFTINPUT_MODE_ATTR = 'windowSoftInputMode', 0x101022b
    NO_HISTORY_ATTR = 'noHistory', 0x101022d
    REQ_FIVE_WAY_NAV_ATTR = 'reqFiveWayNav', 0x01010232
    ANY_DENSITY_ATTR = 'anyDensity', 0x0101026c
    TARGET_SDK_VERSION_ATTR = 'targetSdkVersion', 0x01010270
    MAX_SDK_VERSION_ATTR = 'maxSdkVersion', 0x01010271
    TEST_ONLY_ATTR = 'testOnly', 0x01010272
    ALLOW_BACKUP_ATTR = 'allowBackup', 0x1010280
    GL_ES_VERSION_ATTR = 'glEsVersion', 0x01010281
    SMALL_SCREEN_ATTR = 'smallScreens', 0x01010284
    NORMAL_SCREEN_ATTR = 'normalScreens', 0x01010285
    LARGE_SCREEN_ATTR = 'largeScreens', 0x01010286
    REQUIRED_ATTR = 'required', 0x0101028e
    INSTALL_LOCATION_ATTR = 'installLocation', 0x10102b7
    VM_SAFE_MODE = 'vmSafeMode', 0x10102b8
    XLARGE_SCREEN_ATTR = 'xlargeScreens', 0x010102bf
    SCREEN_SIZE_ATTR = 'screenSize', 0x010102ca
    SCREEN_DENSITY_ATTR = 'screenDensity', 0x010102cb
    HARDWARE_ACCELERATED_ATTR = 'hardwareAccelerated', 0x10102d3
    LARGE_HEAP = 'largeHeap', 0x101035a
    REQUIRES_SMALLEST_WIDTH_DP_ATTR = 'requiresSmallestWidthDp', 0x01010364
    COMPATIBLE_WIDTH_LIMIT_DP_ATTR = 'compatibleWidthLimitDp', 0x01010365
    LARGEST_WIDTH_LIMIT_DP_ATTR = 'largestWidthLimitDp', 0x01010366
    STOP_WITH_TASK_ATTR = 'stopWithTask', 0x101036a
    PUBLIC_KEY_ATTR = 'publicKey', 0x010103a6
    ISOLATED_PROCESS = 'isolatedProcess', 0x10103a9
    SUPPORTS_RT1 = 'supportsRtl', 0x10103af
    CATEGORY_ATTR = 'category', 0x010103e8
    RESIZEABLE_ACTIVITY_ATTR = 'resizeableActivity', 0x10104f6
    NETWORK_SECURITY_CONFIG = 'networkSecurityConfig', 0x1010527
    COMPILE_SDK_VERSION_ATTR = 'compileSdkVersion', 0x01010572
    COMPILE_SDK_VERSION_CODENAME_ATTR = 'compileSdkVersionCodename', 0x01010573
    APP_COMPONENTFACTORY = 'appComponentFactory', 0x101057a

    @staticmethod
    def list():
        '''获取attr列表, 按资源id排序
        '''
        result = []
        for key in EnumAttrType.__dict__:
            if key != key.upper(): continue
            val = EnumAttrType.__dict__[key]
            if not isinstance(val, tuple): continue
            result.append(val)
        result = sorted(result, key=lambda it: it[1])
        return result

    @staticmethod
    def get_value(name):
        for key, val in EnumAttrType.list():
            if key == name: return val
        return 0xFFFFFFFF

    @staticmethod
    def get_name(res_id):
        for key, val in EnumAttrType.list():
            if val == res_id: return key
        return None


class ResourceIdResolver(object):
    '''资源id解析器, 默认不做解析, 直接输出id
    '''

    def resolve(self, res_id):
        '''
        :param res_id: 资源id
        :type  res_id: int
        :returns: str
        '''
        return '@ref/0x%x' % (res_id & 0xFFFFFFFF)


NO_RESOLUTION = ResourceIdResolver()


class DictResourceIdResolver(ResourceIdResolver):
    '''根据 {资源id: "@type/name"} 字典解析
    '''

    def __init__(self, mapping, fallback=NO_RESOLUTION):
        self._mapping = dict(mapping)
        self._fallback = fallback

    def resolve(self, res_id):
        name = self._mapping.get(res_id & 0xFFFFFFFF)
        if name is None:
            return self._fallback.resolve(res_id)
        return name


class AndroidAttrResolver(ResourceIdResolver):
    '''将系统属性id解析为 @android:attr/<name>
    '''

    def __init__(self, fallback=NO_RESOLUTION):
        self._attrs = dict((val, key) for key, val in EnumAttrType.list())
        self._fallback = fallback

    def resolve(self, res_id):
        name = self._attrs.get(res_id & 0xFFFFFFFF)
        if name is None:
            return self._fallback.resolve(res_id)
        return '@android:attr/%s' % name
