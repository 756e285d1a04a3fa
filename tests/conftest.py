import json

import pytest

WAKULLA_HTML = """
<html><body>
<div id="ctlBodyPane_ctl01_ctl01_dynamicSummaryData_divSummary">
  <span id="ctlBodyPane_ctl01_ctl01_dynamicSummaryData_rptrDynamicColumns_ctl00_pnlSingleValue">00-00-012-000-00123-000</span>
  <table><tbody>
    <tr><th><strong>Property Use</strong></th><td><span>{use}</span></td></tr>
    <tr><th><strong>Tax Description</strong></th><td><span>LOT 5 BLK 3 WAKULLA GARDENS</span></td></tr>
    <tr><th><strong>Sec/Twp/Rng</strong></th><td><span>12-3S-1W</span></td></tr>
    <tr><th><strong>Acreage</strong></th><td><span>0.500</span></td></tr>
  </tbody></table>
</div>
<div>
  <span id="ctlBodyPane_ctl02_ctl01_rptOwner_ctl00_sprOwnerName1_lnkUpmSearchLinkSuppressed_lblSearch">JOHN A SMITH &amp; JANE SMITH</span>
  <span id="ctlBodyPane_ctl02_ctl01_rptOwner_ctl00_lblOwnerAddress">10 ELM ST<br/>CRAWFORDVILLE, FL 32327</span>
</div>
<section>
  <div class="module-header"><div class="title">Buildings</div></div>
  <div class="block-row">
    <div class="two-column-blocks"><table><tbody>
      <tr><th><strong>Type</strong></th><td><span>SINGLE FAM</span></td></tr>
      <tr><th><strong>Total Area</strong></th><td><span>2,100</span></td></tr>
      <tr><th><strong>Heated Area</strong></th><td><span>1,800</span></td></tr>
      <tr><th><strong>Exterior Walls</strong></th><td><span>VINYL SIDING; BRK</span></td></tr>
      <tr><th><strong>Interior Walls</strong></th><td><span>DRYWALL</span></td></tr>
      <tr><th><strong>Roof Cover</strong></th><td><span>ASPHALT SHINGLE</span></td></tr>
      <tr><th><strong>Roof Type</strong></th><td><span>GABLE</span></td></tr>
      <tr><th><strong>Frame Type</strong></th><td><span>WOOD FRAME</span></td></tr>
      <tr><th><strong>Floor Cover</strong></th><td><span>CARPET; CERAMIC TILE</span></td></tr>
    </tbody></table></div>
    <div class="two-column-blocks"><table><tbody>
      <tr><th><strong>Heat</strong></th><td><span>AIR DUCTED</span></td></tr>
      <tr><th><strong>Air Conditioning</strong></th><td><span>CENTRAL</span></td></tr>
      <tr><th><strong>Bedrooms</strong></th><td><span>3</span></td></tr>
      <tr><th><strong>Bathrooms</strong></th><td><span>2.5</span></td></tr>
      <tr><th><strong>Stories</strong></th><td><span>1</span></td></tr>
      <tr><th><strong>Actual Year Built</strong></th><td><span>1998</span></td></tr>
    </tbody></table></div>
  </div>
</section>
<table id="ctlBodyPane_ctl06_ctl01_grdSales_grdFlat"><tbody>
  <tr><th>0040</th><td>SEPTIC TANK</td></tr>
  <tr><th>0050</th><td>WELL</td></tr>
</tbody></table>
<table id="ctlBodyPane_ctl08_ctl01_grdSales"><tbody>
  <tr><th>Sale Date</th><th>Sale Price</th><th>Instrument</th></tr>
  <tr>
    <td>6/15/2020</td><td>$250,000</td><td>WD</td>
    <td><a href="https://records.example.com/deed?b=1234&amp;p=567">1234/567</a></td>
    <td>Q</td><td>01</td><td>I</td><td>BOB JONES</td><td>JOHN A SMITH &amp; JANE SMITH</td>
  </tr>
  <tr>
    <td>1/2/2005</td><td>$90,000</td><td>QC</td><td>800/12</td>
    <td>U</td><td>11</td><td>V</td><td>MARY BROWN</td><td>BOB JONES</td>
  </tr>
</tbody></table>
<table id="ctlBodyPane_ctl11_ctl01_grdValuation_grdYearData">
  <thead><tr><th></th><th class="value-column">2024 Certified Values</th></tr></thead>
  <tbody>
    <tr><th>Building Value</th><td class="value-column">$150,000</td></tr>
    <tr><th>Land Value</th><td class="value-column">$30,000</td></tr>
    <tr><th>Just (Market) Value</th><td class="value-column">$180,000</td></tr>
    <tr><th>Assessed Value</th><td class="value-column">$120,000</td></tr>
    <tr><th>Taxable Value</th><td class="value-column">$70,000</td></tr>
  </tbody>
</table>
</body></html>
"""

DUVAL_HTML = """
<html><body>
<span id="ctl00_cphBody_lblRealEstateNumber">012345-0000</span>
<div id="ownerName"><h2><span id="ctl00_cphBody_repeaterOwnerInformation_ctl00_lblOwnerName">SMITH, JOHN A</span></h2></div>
<span id="ctl00_cphBody_lblPrimarySiteAddressLine2">JACKSONVILLE FL 32204-</span>
<span id="ctl00_cphBody_lblPropertyUse">0100 Single Family Residential</span>
<span id="ctl00_cphBody_lblSubdivision">00123 RIVERSIDE</span>
<span id="ctl00_cphBody_lblTotalArea1">8,712</span>
<span id="ctl00_cphBody_lblBuildingValueCertified">$200,000.00</span>
<span id="ctl00_cphBody_lblLandValueMarketCertified">$60,000.00</span>
<span id="ctl00_cphBody_lblJustMarketValueCertified">$260,000.00</span>
<span id="ctl00_cphBody_lblAssessedValueA10Certified">$240,000.00</span>
<span id="ctl00_cphBody_lblTaxableValueCertified">$190,000.00</span>
<span id="ctl00_cphBody_lblBuildingValueInProgress">$210,000.00</span>
<img id="ctl00_cphBody_imgGISImageFound" src="/MapImage.ashx?re=0123450000"/>
<table id="ctl00_cphBody_gridSalesHistory">
  <tr><th>Book/Page</th><th>Sale Date</th><th>Sale Price</th><th>Deed Instrument Type</th></tr>
  <tr><td><a href="/OnCoreWeb/Search.aspx?bk=19000&amp;pg=123">19000-00123</a></td><td>7/1/2019</td><td>$310,000.00</td><td>WD - Warranty Deed</td></tr>
  <tr><td><a href="/OnCoreWeb/Search.aspx?bk=15000&amp;pg=456">15000-00456</a></td><td>3/3/2010</td><td>$100.00</td><td>QC - Quit Claim</td></tr>
  <tr><td>12000-00001</td><td>1/1/2001</td><td>$0.00</td><td>MS - Miscellaneous</td></tr>
</table>
<table id="ctl00_cphBody_gridLegal">
  <tr><th>LN</th><th>Legal Description</th></tr>
  <tr><td>1</td><td>RIVERSIDE PLAT 12-2S-26E</td></tr>
  <tr><td>2</td><td>LOT 7 BLK 2</td></tr>
</table>
<table id="ctl00_cphBody_gridLand">
  <tr><th>LN</th><th>Code</th><th>Use</th><th>Zoning</th></tr>
  <tr><td>1</td><td>0100</td><td>RES</td><td>RLD-60</td><td>50</td><td>100</td><td>Common</td><td>1.00</td><td>Lot</td><td>$60,000</td></tr>
</table>
<span id="ctl00_cphBody_repeaterBuilding_ctl00_lblYearBuilt">1995</span>
<span id="ctl00_cphBody_repeaterBuilding_ctl00_lblBuildingType">SINGLE FAMILY</span>
<table id="ctl00_cphBody_repeaterBuilding_ctl00_gridBuildingArea">
  <tr><th>Type</th><th>Gross Area</th><th>Heated Area</th><th>Effective Area</th></tr>
  <tr><td>Base Area</td><td>1500</td><td>1500</td><td>1500</td></tr>
  <tr><td>Finished Upper Story</td><td>600</td><td>600</td><td>540</td></tr>
  <tr><td>Finished Open Porch</td><td>100</td><td>0</td><td>30</td></tr>
  <tr><td>Total</td><td>2200</td><td>2100</td><td>2070</td></tr>
</table>
<table id="ctl00_cphBody_repeaterBuilding_ctl00_gridBuildingAttributes">
  <tr><th>Element</th><th>Code</th></tr>
  <tr><td>Stories</td><td>2.000</td></tr>
  <tr><td>Bedrooms</td><td>3.000</td></tr>
  <tr><td>Baths</td><td>2.500</td></tr>
  <tr><td>Rooms / Units</td><td>1.000</td></tr>
</table>
<table id="ctl00_cphBody_repeaterBuilding_ctl00_gridBuildingElements">
  <tr><th>Element</th><th>Code</th><th>Detail</th></tr>
  <tr><td>Exterior Wall</td><td>15</td><td>15 Horizontal Lap</td></tr>
  <tr><td>Exterior Wall</td><td>6</td><td>6 Vertical Sheet</td></tr>
  <tr><td>Roof Struct</td><td>3</td><td>3 Gable or Hip</td></tr>
  <tr><td>Roofing Cover</td><td>3</td><td>3 Asph/Comp Shng</td></tr>
  <tr><td>Interior Wall</td><td>5</td><td>5 Drywall</td></tr>
  <tr><td>Int Flooring</td><td>14</td><td>14 Carpet</td></tr>
  <tr><td>Int Flooring</td><td>11</td><td>11 Cer Clay Tile</td></tr>
  <tr><td>Heating Fuel</td><td>4</td><td>4 Electric</td></tr>
  <tr><td>Heating Type</td><td>4</td><td>4 Forced-Ducted</td></tr>
  <tr><td>Air Cond</td><td>3</td><td>3 Central</td></tr>
</table>
</body></html>
"""


def write_parcel_inputs(folder, html, parcel_id, county, full_address, **address_extra):
    """Lay out input.html, property_seed.json and unnormalized_address.json in folder"""
    request = {
        "method": "GET",
        "url": "https://appraiser.example.com/parcel",
        "multiValueQueryString": {"id": [parcel_id]},
    }
    (folder / "input.html").write_text(html, encoding="utf-8")
    (folder / "property_seed.json").write_text(json.dumps({
        "parcel_id": parcel_id,
        "source_http_request": request,
        "request_identifier": parcel_id,
    }))
    (folder / "unnormalized_address.json").write_text(json.dumps({
        "full_address": full_address,
        "county_jurisdiction": county,
        "source_http_request": request,
        "request_identifier": parcel_id,
        **address_extra,
    }))


@pytest.fixture
def wakulla_parcel(tmp_path):
    def make(use="SINGLE FAMILY", folder=None):
        folder = folder or tmp_path
        write_parcel_inputs(
            folder,
            WAKULLA_HTML.replace("{use}", use),
            "00-00-012-000-00123-000",
            "Wakulla",
            "10 ELM ST, CRAWFORDVILLE, FL 32327",
            latitude=30.18,
            longitude=-84.37,
        )
        return folder
    return make


@pytest.fixture
def duval_parcel(tmp_path):
    write_parcel_inputs(tmp_path, DUVAL_HTML, "012345-0000", "Duval", "1234 RIVERSIDE AVE")
    return tmp_path
