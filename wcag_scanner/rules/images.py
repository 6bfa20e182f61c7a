"""Text alternatives for images, SVGs, background images and image maps."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from wcag_scanner.dom.style import StyleResolver
from wcag_scanner.models.options import ScannerOptions
from wcag_scanner.models.result import Pass, ScanResults, Violation, Warning
from wcag_scanner.rules.base import (
    Rule,
    attr,
    class_names,
    element_info,
    is_hidden,
    snippet,
    text_of,
)
from wcag_scanner.rules.heuristics import (
    has_generic_alt_text,
    is_background_likely_decorative,
    is_likely_decorative_image,
    parse_dimension,
)

NON_TEXT_CONTENT_URL = "https://www.w3.org/WAI/WCAG21/Understanding/non-text-content.html"
MAX_ALT_LENGTH = 125
NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")


@dataclass(frozen=True, kw_only=True)
class ImagesRule(Rule):
    """Checks that non-text content has a text alternative."""

    async def check(
        self,
        document: BeautifulSoup,
        style: StyleResolver,
        options: ScannerOptions,
    ) -> ScanResults:
        """Check <img>, <svg>, background images and image maps."""
        results = ScanResults()
        for img in document.find_all("img"):
            self._check_image(img, results)
        for svg in document.find_all("svg"):
            self._check_svg(svg, results)
        for tag in document.find_all(True):
            self._check_background(tag, style, results)
        for image_map in document.find_all("map"):
            self._check_map(document, image_map, results)
        return results

    @staticmethod
    def _check_image(img: Tag, results: ScanResults) -> None:
        info = element_info(img, src=attr(img, "src") or None)
        markup = snippet(img)

        alt = attr(img, "alt")
        if alt is None:
            results.violations.append(
                Violation(
                    rule="img-alt",
                    element=info,
                    impact="critical",
                    description="Image is missing alt text",
                    snippet=markup,
                    wcag=["1.1.1"],
                    help="Images must have alternative text",
                    help_url=NON_TEXT_CONTENT_URL,
                )
            )
        elif alt == "":
            link = img.find_parent("a")
            decorative = is_likely_decorative_image(
                role=attr(img, "role"),
                width=parse_dimension(attr(img, "width")),
                height=parse_dimension(attr(img, "height")),
                classes=class_names(img),
                in_link_with_text=link is not None and bool(text_of(link)),
            )
            if decorative:
                results.passes.append(
                    Pass(
                        rule="img-alt-decorative",
                        element=info,
                        description="Decorative image has appropriate empty alt text",
                        snippet=markup,
                    )
                )
            else:
                results.warnings.append(
                    Warning(
                        rule="img-alt-decorative",
                        element=info,
                        impact="moderate",
                        description="Image has empty alt text but may not be decorative",
                        snippet=markup,
                        wcag=["1.1.1"],
                        help=(
                            "Verify this image is decorative; "
                            "if not, add descriptive alt text"
                        ),
                    )
                )
        elif has_generic_alt_text(alt):
            results.warnings.append(
                Warning(
                    rule="img-alt-generic",
                    element=info,
                    impact="moderate",
                    description="Image may have generic/placeholder alt text",
                    snippet=markup,
                    wcag=["1.1.1"],
                    help="Replace generic alt text with specific description",
                )
            )
        elif len(alt) > MAX_ALT_LENGTH:
            results.warnings.append(
                Warning(
                    rule="img-alt-long",
                    element=info,
                    impact="minor",
                    description="Alt text is unusually long (over 125 characters)",
                    snippet=markup,
                    wcag=["1.1.1"],
                    help=(
                        "Consider using a more concise alt text "
                        "or using a longdesc attribute"
                    ),
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="img-alt",
                    element=info,
                    description="Image has appropriate alt text",
                    snippet=markup,
                )
            )

        if img.has_attr("width") and img.has_attr("height"):
            results.passes.append(
                Pass(
                    rule="img-dimensions",
                    element=info,
                    description="Image has explicit width and height",
                    snippet=markup,
                )
            )
        else:
            results.warnings.append(
                Warning(
                    rule="img-dimensions",
                    element=info,
                    impact="minor",
                    description="Image is missing width and/or height attributes",
                    snippet=markup,
                    help="Set explicit width and height to prevent layout shifts",
                )
            )

    @staticmethod
    def _check_svg(svg: Tag, results: ScanResults) -> None:
        info = element_info(svg)
        markup = snippet(svg)

        if attr(svg, "role") != "img":
            results.warnings.append(
                Warning(
                    rule="svg-role",
                    element=info,
                    impact="moderate",
                    description='SVG element should have role="img"',
                    snippet=markup,
                    wcag=["1.1.1"],
                    help='Add role="img" to SVG elements',
                )
            )

        title = svg.find("title")
        if title is None and not svg.has_attr("aria-label") and not svg.has_attr(
            "aria-labelledby"
        ):
            results.violations.append(
                Violation(
                    rule="svg-accessible-name",
                    element=info,
                    impact="serious",
                    description=(
                        "SVG lacks accessible name "
                        "(title, aria-label, or aria-labelledby)"
                    ),
                    snippet=markup,
                    wcag=["1.1.1"],
                    help="Add a <title> element or aria-label attribute to SVG",
                )
            )
        elif title is not None and not text_of(title):
            results.violations.append(
                Violation(
                    rule="svg-title-empty",
                    element=info,
                    impact="serious",
                    description="SVG title element is empty",
                    snippet=markup,
                    wcag=["1.1.1"],
                    help="Add content to the SVG title element",
                )
            )
        else:
            results.passes.append(
                Pass(
                    rule="svg-accessible-name",
                    element=info,
                    description="SVG has an accessible name",
                    snippet=markup,
                )
            )

    @staticmethod
    def _check_background(tag: Tag, style: StyleResolver, results: ScanResults) -> None:
        background_image = style.computed_style(tag).background_image
        if "url(" not in background_image or is_hidden(tag, style):
            return
        if text_of(tag) or any(tag.has_attr(name) for name in NAME_ATTRIBUTES):
            return
        if is_background_likely_decorative(tag.name, class_names(tag)):
            return

        results.warnings.append(
            Warning(
                rule="background-image",
                element=element_info(tag, with_text=True),
                impact="moderate",
                description="Element with background image may need text alternative",
                snippet=snippet(tag),
                wcag=["1.1.1"],
                help=(
                    "If the background image conveys meaning, add text "
                    "alternative via aria-label or text content"
                ),
            )
        )

    @staticmethod
    def _check_map(document: BeautifulSoup, image_map: Tag, results: ScanResults) -> None:
        name = attr(image_map, "name")
        info = element_info(image_map, name=name or None)

        used = bool(name) and any(
            attr(img, "usemap") == f"#{name}" for img in document.find_all("img")
        )
        if not used:
            results.warnings.append(
                Warning(
                    rule="map-unused",
                    element=info,
                    impact="minor",
                    description="Image map appears to be unused",
                    snippet=snippet(image_map),
                    help="Remove unused image maps",
                )
            )
            return

        for area in image_map.find_all("area"):
            area_info = element_info(
                area,
                shape=attr(area, "shape") or None,
                coords=attr(area, "coords") or None,
                href=attr(area, "href") or None,
            )
            if area.has_attr("alt"):
                results.passes.append(
                    Pass(
                        rule="area-alt",
                        element=area_info,
                        description="Area element has alt text",
                        snippet=snippet(area),
                    )
                )
            else:
                results.violations.append(
                    Violation(
                        rule="area-alt",
                        element=area_info,
                        impact="critical",
                        description="Area element in image map is missing alt text",
                        snippet=snippet(area),
                        wcag=["1.1.1", "2.4.4"],
                        help="Add alt text to all area elements",
                    )
                )
