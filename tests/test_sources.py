import pytest

from careers_engine.engine import drop_seen
from careers_engine.errors import UnknownCompanyError
from careers_engine.models import JobRecord
from careers_engine.sources import SITES, get_site
from careers_engine.sources.accenture import AccentureSite
from careers_engine.sources.amazon import AmazonSite
from careers_engine.sources.capgemini import CapgeminiSite
from careers_engine.sources.cognizant import CognizantSite
from careers_engine.sources.deloitte import DeloitteSite
from careers_engine.sources.exl import EXLSite
from careers_engine.sources.ibm import IBMSite
from careers_engine.sources.marriott import MarriottSite
from careers_engine.sources.sbi import SBISite
from careers_engine.sources.schneider_electric import SchneiderElectricSite
from careers_engine.sources.syngene import SyngeneSite
from careers_engine.utils import today_iso


def test_registry_covers_every_site():
    assert len(SITES) == 11
    assert isinstance(get_site("schneider electric"), SchneiderElectricSite)
    assert isinstance(get_site(" EXL "), EXLSite)
    with pytest.raises(UnknownCompanyError):
        get_site("Acme")


def test_accenture_page_urls_and_cards():
    site = AccentureSite()
    base = site.prepare_base_url("https://www.accenture.com/in-en/careers/jobsearch?jk=&pg=1", 4)
    assert base == "https://www.accenture.com/in-en/careers/jobsearch?jk=&pg=4"
    assert site.page_url(base, 2) == "https://www.accenture.com/in-en/careers/jobsearch?jk=&pg=2"

    html = """
    <div class="cmp-teaser card">
      <h3 class="cmp-teaser__title">Data Engineer</h3>
      <button class="cmp-teaser__save-job-card" data-job-id="R00123"></button>
      <span class="cmp-teaser__job-listing-semibold skill">Data &amp; AI</span>
      <span class="cmp-teaser-city">Pune</span>
      <div class="cmp-teaser__job-listing"><p class="description">Build
         pipelines   at scale</p></div>
      <span class="cmp-teaser__job-listing-posted-date">2 days ago</span>
    </div>
    <div class="cmp-teaser card"><h3 class="cmp-teaser__title">Job Alert Emails</h3></div>
    """
    records = site.parse_listing(html, 2)

    assert len(records) == 1
    job = records[0]
    assert job.job_id == "R00123"
    assert job.function == "Data & AI"
    assert job.location == "Pune"
    assert job.description == "Build pipelines at scale"
    assert job.posted_on == "2 days ago"
    assert job.page == 2


def test_amazon_cards_and_page_count():
    site = AmazonSite()
    html = """
    <ul><li><div role="button">
      <h3><a href="/en/jobs/2712345/program-manager-firetv">Program Manager</a></h3>
      <div class="metadatum-module_text__ncKFr">Bengaluru, KA, IND</div>
      <div class="metadatum-module_text__ncKFr">Updated: 10/01/2025</div>
      <div class="job-card-module_content__8sS0J">Own the FireTV launch plan.</div>
    </div></li>
    <li><div role="button"><h3><a href="/en/teams/devices">Teams</a></h3></div></li></ul>
    <nav aria-label="Page selection">
      <button data-test-id="1">1</button><button data-test-id="2">2</button>
      <button data-test-id="7">7</button><button data-test-id="next-page">Next</button>
    </nav>
    """
    records = site.parse_listing(html, 1)

    assert [r.job_id for r in records] == ["2712345"]
    job = records[0]
    assert job.location == "Bengaluru"
    assert job.posted_on == "10/01/2025"
    assert job.function == "FireTV"
    assert site.total_pages(html) == 7
    assert site.total_pages("<div></div>") == 1


CAPGEMINI_ROW = """
<a class="table-tr filter-box tag-active joblink" href="/jobs/98765+senior-consultant/">
  <div class="table-td"><div>Senior Consultant</div></div>
  <div class="table-td"><div class="label">Business Unit</div><div>Cloud Infrastructure</div></div>
  <div class="table-td"><div>Mumbai</div></div>
</a>
"""


def test_capgemini_listing_and_detail():
    site = CapgeminiSite()
    [job] = site.parse_listing(CAPGEMINI_ROW, 1)

    assert job.job_id == "98765"
    assert job.title == "Senior Consultant"
    assert job.function == "Cloud Infrastructure"
    assert job.location == "Mumbai"
    assert job.detail_url == "/jobs/98765+senior-consultant/"
    assert site.wants_detail(job)

    detail = """
    <div class="article-text">
      <h2>Job Description</h2><p>Design  landing zones.</p><p>Lead migrations.</p>
      <h2>Grade Specific</h2><p>Grade C2.</p>
      <h2>Benefits</h2><p>Not included.</p>
    </div>
    <div class="job-meta-box-detail"><span class="label">Posted on</span><span class="value">01 Oct 2025</span></div>
    """
    site.parse_detail(detail, job)
    assert job.description == "Design landing zones. Lead migrations.\n\nGrade C2."
    assert job.posted_on == "01 Oct 2025"


def test_capgemini_empty_detail_and_limit():
    site = CapgeminiSite()
    job = JobRecord(company="Capgemini")
    site.parse_detail("<html></html>", job)
    assert job.description == "No description available"
    assert site.record_limit(2, 4) == 90
    assert site.record_limit(1, None) is None


def test_cognizant_listing_detail_and_failure():
    site = CognizantSite()
    assert site.page_url("https://careers.cognizant.com/in-en/jobs/", 2) == (
        "https://careers.cognizant.com/in-en/jobs/?page=2"
        "&location=India&radius=100&cname=India&ccode=IN&pagesize=10#results"
    )
    html = """
    <div class="card card-job">
      <h2 class="card-title"><a href="/in-en/jobs/00061/analyst/">Analyst</a></h2>
      <ul class="job-meta"><li class="list-inline-item">Chennai</li><li class="list-inline-item">Operations</li></ul>
      <div class="card-job-actions" data-id="00061"></div>
    </div>
    """
    [job] = site.parse_listing(html, 3)
    assert (job.job_id, job.location, job.function, job.page) == ("00061", "Chennai", "Operations", 3)

    site.parse_detail(
        '<div class="cms-content"><p>Support  clients.</p></div><dl><dt>Date published</dt><dd>05-Oct-2025</dd></dl>',
        job,
    )
    assert job.description == "Support clients."
    assert job.posted_on == "05-Oct-2025"

    site.detail_failed(job)
    assert job.description == "Error fetching details"
    assert job.posted_on == ""


def test_deloitte_rows():
    site = DeloitteSite()
    assert site.page_url("https://jobs.example.com/search/?q=", 3) == "https://jobs.example.com/search/?q=&startrow=50"
    html = """
    <table>
      <tr class="data-row">
        <td><a class="jobTitle-link" href="/job/Hyderabad-Tax-Analyst/123456/"> Tax Analyst </a></td>
        <td class="jobLocation">Hyderabad, IN</td>
        <td class="jobDate">Oct 2, 2025</td>
      </tr>
    </table>
    """
    [job] = site.parse_listing(html, 1)
    assert job.job_id == "123456"
    assert job.title == "Tax Analyst"
    assert job.location == "Hyderabad, IN"
    assert job.posted_on == "Oct 2, 2025"
    assert not site.wants_detail(job)


def test_syngene_rows_and_formatted_detail():
    site = SyngeneSite()
    html = (
        '<table><tr class="data-row"><td><a class="jobTitle-link" href="/job/Scientist/77/">Scientist</a></td>'
        '<td class="jobFacility">SYN-77</td><td class="jobDepartment">Research</td>'
        '<td class="jobLocation">Bangalore, India</td><td class="jobDate">Oct 1, 2025</td></tr></table>'
    )
    [job] = site.parse_listing(html, 1)
    assert (job.job_id, job.function, job.location) == ("SYN-77", "Research", "Bangalore")
    assert job.detail_url == "/job/Scientist/77/"

    site.parse_detail(
        '<div class="jobdescription"><p>About the role</p><ul><li>Run assays</li><li>Report results</li></ul></div>',
        job,
    )
    assert job.description == "About the role\n• Run assays\n• Report results"


def test_exl_cards_pages_and_detail():
    site = EXLSite()
    html = """
    <span class="totale-num">100 Jobs</span>
    <div class="card-block">
      <div class="title_block"><a class="link" href="/job/exl-4242">Data Analyst</a></div>
      <span class="job-code">EXL-4242</span>
      <ul class="listing-inline"><li>Analytics &gt; Data Science</li><li>India &gt; Noida &gt; Sector 62</li></ul>
      <div class="text-cell font-bold">2-4 Years</div>
      <span class="tag-job">Python</span><span class="tag-job">python</span><span class="tag-job">SQL</span>
      <div class="last-child"><span class="link2">03-Oct-2025</span></div>
    </div>
    """
    assert site.total_pages(html) == 3
    assert site.total_pages("<div></div>") is None

    [job] = site.parse_listing(html, 1)
    assert job.job_id == "EXL-4242"
    assert job.location == "Noida, Sector 62"
    assert job.description == "Data Science | Experience: 2-4 Years | Skills: Python, SQL"
    assert job.posted_on == "03-Oct-2025"

    site.parse_detail('<div class="panel-body"><p>Model churn.</p><p></p><p>Present insights.</p></div>', job)
    assert job.detailed_description == "Model churn.\nPresent insights."

    site.detail_failed(job)
    assert job.detailed_description == "Failed to fetch detailed description"
    assert [c[0] for c in site.columns][-3:] == ["detailedDescription", "postedOn", "page"]


def test_ibm_cards():
    site = IBMSite()
    html = """
    <div class="bx--card-group__cards__col">
      <a href="https://careers.ibm.com/job/21012345/software-engineer/">
        <div class="bx--card__content">
          <div class="bx--card__eyebrow">Software Engineering</div>
          <div class="bx--card__heading">Software Engineer</div>
          <div class="ibm--card__copy__inner">Professional<br/>Bangalore, IN</div>
        </div>
      </a>
    </div>
    """
    [job] = site.parse_listing(html, 1)
    assert job.job_id == "REQ21012345"
    assert job.title == "Software Engineer"
    assert job.function == "Software Engineering"
    assert job.location == "Bangalore"
    assert job.posted_on == today_iso()

    site.detail_failed(job)
    assert job.description == "Failed to load description"


def test_marriott_items():
    site = MarriottSite()
    html = """
    <div class="results-list__item">
      <a class="results-list__item-title" href="/job/555"><span>Front Desk Agent</span></a>
      <span class="reference">25123456</span>
      <span class="results-list__item-street--label">MG Road</span>
      <span class="results-list__item-location--label">JW Marriott Bengaluru</span>
    </div>
    """
    [job] = site.parse_listing(html, 1)
    assert job.company == "Marriott"
    assert job.job_id == "25123456"
    assert job.location == "MG Road - JW Marriott Bengaluru"
    assert job.title == "Front Desk Agent"
    assert job.detail_url == "/job/555"

    site.parse_detail("<div></div>", job)
    assert job.description == "Description not available"


def test_sbi_cards_and_end_marker():
    site = SBISite()
    html = """
    <div class="job-list-item">
      <a class="job-list-item__link" aria-labelledby="job-101"></a>
      <span class="job-tile__title">Deputy Manager - Finance</span>
      <span data-bind="html: primaryLocation">Mumbai, India</span>
      <div class="job-list-item__description">Handle treasury.</div>
      <div><span class="job-list-item__job-info-label--posting-date">Posted</span>
           <span class="job-list-item__job-info-value">10/04/2025</span></div>
    </div>
    """
    [job] = site.parse_listing(html, 2)
    assert (job.title, job.function) == ("Deputy Manager", "Finance")
    assert job.job_id == "job-101"
    assert job.location == "Mumbai"
    assert job.posted_on == "10/04/2025"
    assert "page" not in [c[0] for c in site.columns]

    assert site.is_end_of_results('<div class="end-of-jobs-message">That is all</div>')
    assert not site.is_end_of_results(html)


def test_schneider_fallback_id_and_empty_first_page():
    site = SchneiderElectricSite()
    assert site.page_url("https://careers.se.com/jobs?page=1&country=India", 3) == (
        "https://careers.se.com/jobs?page=3&country=India"
    )
    html = """
    <div class="jobs-list-item"><span class="job-title">Field Engineer</span>
      <span class="job-location">Pune</span><span class="job-function">Services</span></div>
    """
    first = site.parse_listing(html, 1)[0]
    again = site.parse_listing(html, 2)[0]
    assert first.job_id.startswith("SE-")
    assert first.job_id == again.job_id
    assert first.description == "Services"

    assert not site.stop_on_empty(1, "<div></div>")
    assert site.stop_on_empty(2, "<div></div>")
    assert site.is_end_of_results('<p class="no-results-message">No jobs</p>')


def test_ibm_cards_without_requisition_are_all_kept():
    site = IBMSite()
    card = (
        '<div class="bx--card-group__cards__col"><a href="/careers/search?role={n}">'
        '<div class="bx--card__content"><div class="bx--card__heading">Role {n}</div></div></a></div>'
    )
    records = site.parse_listing("".join(card.format(n=n) for n in range(3)), 1)

    assert [r.job_id for r in records] == ["", "", ""]
    assert len(drop_seen(records, set())) == 3
