# siteadmin/visibility/pages.py
# Page catalogue for visibility overrides (public site routes and their sections)
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

VISIBILITY_CONFIG_KEY = "页面可见性"
VISIBILITY_SCHEMA_ID = "visibility.v1"


@dataclass(frozen=True)
class SectionDefinition:
    key: str
    label: str


@dataclass(frozen=True)
class PageDefinition:
    key: str
    label: str
    route: Optional[str] = None
    route_prefix: Optional[str] = None
    segment_depth: Optional[int] = None
    sections: tuple[SectionDefinition, ...] = field(default_factory=tuple)

    @property
    def section_keys(self) -> list[str]:
        return [s.key for s in self.sections]


def _sections(*pairs: tuple[str, str]) -> tuple[SectionDefinition, ...]:
    return tuple(SectionDefinition(key, label) for key, label in pairs)


VISIBILITY_PAGES: tuple[PageDefinition, ...] = (
    PageDefinition(
        "home", "首页", route="/",
        sections=_sections(
            ("hero", "首页 – 英雄区"),
            ("applications", "首页 – 应用场景"),
            ("product", "首页 – 产品矩阵"),
            ("company", "首页 – 公司概览"),
            ("inventory", "首页 – 现货库存"),
            ("contactCta", "首页 – 联系 CTA"),
        ),
    ),
    PageDefinition(
        "productsIndex", "产品中心", route="/products", segment_depth=1,
        sections=_sections(
            ("hero", "产品中心 – 英雄区"),
            ("sidebar", "产品中心 – 侧边导航"),
            ("productList", "产品中心 – 产品列表"),
        ),
    ),
    PageDefinition(
        "productDetail", "产品详情页", route_prefix="/products/", segment_depth=2,
        sections=_sections(
            ("hero", "产品详情 – 顶部英雄区"),
            ("overview", "产品详情 – 概览介绍"),
            ("highlights", "产品详情 – 亮点板块"),
            ("gallery", "产品详情 – 图库"),
            ("extraSections", "产品详情 – 其他内容"),
            ("advisor", "产品详情 – 顾问 CTA"),
        ),
    ),
    PageDefinition(
        "casesIndex", "案例列表", route="/cases", segment_depth=1,
        sections=_sections(
            ("hero", "案例列表 – 英雄区"),
            ("categories", "案例列表 – 分类卡片"),
            ("cta", "案例列表 – 底部引导"),
        ),
    ),
    PageDefinition(
        "casesCategory", "案例分类页", route_prefix="/cases/", segment_depth=2,
        sections=_sections(
            ("sidebar", "案例分类 – 侧边导航"),
            ("header", "案例分类 – 顶部信息"),
            ("caseGrid", "案例分类 – 案例列表"),
            ("cta", "案例分类 – 顾问 CTA"),
        ),
    ),
    PageDefinition(
        "casesDetail", "案例详情页", route_prefix="/cases/", segment_depth=3,
        sections=_sections(
            ("sidebar", "案例详情 – 侧边导航"),
            ("hero", "案例详情 – 顶部英雄区"),
            ("background", "案例详情 – 项目背景"),
            ("highlights", "案例详情 – 解决方案亮点"),
            ("deliverables", "案例详情 – 交付成果"),
            ("gallery", "案例详情 – 图库"),
            ("related", "案例详情 – 相关推荐"),
            ("advisor", "案例详情 – 顾问 CTA"),
        ),
    ),
    PageDefinition(
        "inventory", "现货库存", route="/inventory",
        sections=_sections(
            ("hero", "现货库存 – 英雄区"),
            ("sections", "现货库存 – 展示板块"),
        ),
    ),
    PageDefinition(
        "videos", "视频库", route="/videos",
        sections=_sections(
            ("hero", "视频库 – 英雄区"),
            ("library", "视频库 – 视频列表"),
        ),
    ),
    PageDefinition(
        "newsIndex", "新闻中心", route="/news",
        sections=_sections(
            ("hero", "新闻中心 – 英雄区"),
            ("timeline", "新闻中心 – 动态列表"),
        ),
    ),
    PageDefinition(
        "newsDetail", "新闻详情页", route_prefix="/news/", segment_depth=2,
        sections=_sections(
            ("hero", "新闻详情 – 顶部英雄区"),
            ("body", "新闻详情 – 正文内容"),
            ("more", "新闻详情 – 更多推荐"),
            ("meta", "新闻详情 – 发布信息"),
        ),
    ),
    PageDefinition(
        "about", "关于我们", route="/about",
        sections=_sections(
            ("hero", "关于我们 – 英雄区"),
            ("company", "关于我们 – 公司简介"),
            ("factory", "关于我们 – 制造能力"),
            ("team", "关于我们 – 团队介绍"),
            ("honors", "关于我们 – 荣誉资质"),
            ("why", "关于我们 – 为什么选择我们"),
        ),
    ),
    PageDefinition(
        "contact", "联系方式", route="/contact",
        sections=_sections(
            ("hero", "联系方式 – 英雄区"),
            ("channels", "联系方式 – 联系渠道"),
            ("form", "联系方式 – 留资表单"),
            ("guarantee", "联系方式 – 服务保障"),
        ),
    ),
    PageDefinition("library", "资料库", route="/library"),
    PageDefinition("downloads", "下载中心", route="/downloads"),
    PageDefinition("faq", "常见问题", route="/faq"),
    PageDefinition("partners", "合作伙伴", route="/partners"),
    PageDefinition("careers", "招聘信息", route="/careers"),
    PageDefinition("privacy", "隐私政策", route="/privacy"),
    PageDefinition("terms", "用户条款", route="/terms"),
)

PAGES_BY_KEY: dict[str, PageDefinition] = {page.key: page for page in VISIBILITY_PAGES}

# Which stored config feeds each page (used by the field dictionary)
PAGE_TO_CONFIG_KEY: dict[str, str] = {
    "home": "首页",
    "productsIndex": "产品中心",
    "productDetail": "产品详情",
    "newsIndex": "新闻中心",
    "newsDetail": "新闻中心",
    "about": "关于时代",
    "contact": "联系方式",
    "library": "资料库",
    "downloads": "下载中心",
    "faq": "常见问题",
    "partners": "合作伙伴",
    "privacy": "隐私政策",
    "terms": "服务条款",
    "inventory": "现货库存",
    "videos": "视频库",
    "casesIndex": "案例展示",
    "casesCategory": "案例展示",
    "casesDetail": "案例展示",
    "careers": "招聘信息",
}


def get_page(page_key: str) -> Optional[PageDefinition]:
    return PAGES_BY_KEY.get(page_key)
