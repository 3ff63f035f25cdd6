"""Tests for the site catalogue."""

import pytest

from advisor_audit.config.sites import BUILTIN_SITES, get_site, load_sites
from advisor_audit.errors import SiteNotFoundError


class TestBuiltinSites:
    """Tests for the built-in catalogue."""

    def test_au_pages(self):
        """The AU site visits its four pages in order."""
        site = BUILTIN_SITES["au"]
        assert [page.title for page in site.pages] == [
            "Home",
            "Investing",
            "Credit Cards",
            "SuperFunds",
        ]

    def test_ca_pages(self):
        """The CA site has eleven pages, all on the CA locale."""
        site = BUILTIN_SITES["ca"]
        assert len(site.pages) == 11
        assert all("/advisor/ca/" in page.url for page in site.pages)

    def test_ca_delayed_pages(self):
        """The CA delayed audit visits four pages in order."""
        site = get_site("ca-delayed")
        assert [page.title for page in site.pages] == [
            "Home",
            "Investing",
            "Credit Cards",
            "Mortgage",
        ]
        assert all("/advisor/ca/" in page.url for page in site.pages)

    def test_titles_unique(self):
        """Titles are unique per site, so screenshot names do not clash."""
        for site in BUILTIN_SITES.values():
            titles = [page.title for page in site.pages]
            assert len(titles) == len(set(titles))


class TestSiteLookup:
    """Tests for get_site and load_sites."""

    def test_get_site_case_insensitive(self):
        assert get_site("AU").code == "au"

    def test_unknown_site(self):
        """Unknown codes list what is available."""
        with pytest.raises(SiteNotFoundError, match="available: au, ca"):
            get_site("uk")

    def test_yaml_sites(self, tmp_path):
        """Sites from YAML are added to the catalogue."""
        config_file = tmp_path / "sites.yaml"
        config_file.write_text(
            "sites:\n"
            "  NZ:\n"
            "    name: Forbes Advisor NZ\n"
            "    pages:\n"
            "      - title: Home\n"
            "        url: https://www.forbes.com/advisor/nz/\n"
            "        heading: Smart Financial Decisions\n"
        )

        sites = load_sites(config_file)

        assert set(sites) == {"au", "ca", "ca-delayed", "nz"}
        site = get_site("nz", config_file)
        assert site.name == "Forbes Advisor NZ"
        assert site.resource_filter == "forbes.com"
        assert site.pages[0].heading == "Smart Financial Decisions"

    def test_yaml_replaces_builtin(self, tmp_path):
        """A YAML site with a built-in code replaces it."""
        config_file = tmp_path / "sites.yaml"
        config_file.write_text(
            "sites:\n"
            "  au:\n"
            "    name: AU smoke\n"
            "    pages: []\n"
        )

        site = get_site("au", config_file)

        assert site.name == "AU smoke"
        assert site.pages == []
        assert BUILTIN_SITES["au"].name == "Forbes Advisor AU"
