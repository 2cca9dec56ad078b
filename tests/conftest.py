"""Pytest configuration for svddoc tests."""

import pytest

from svddoc.svd.svd_loader import parse_svd

DEMO_SVD = """<?xml version="1.0" encoding="utf-8"?>
<device schemaVersion="1.3">
  <name>DEMO</name>
  <peripherals>
    <peripheral>
      <name>TIM1</name>
      <description>Advanced
        control   timer</description>
      <baseAddress>0x40001000</baseAddress>
      <interrupt>
        <name>TIM1_UP</name>
        <description>TIM1 update</description>
        <value>25</value>
      </interrupt>
      <registers>
        <register>
          <name>CR1</name>
          <description>control register 1</description>
          <addressOffset>0x0</addressOffset>
          <size>0x20</size>
          <fields>
            <field>
              <name>CEN</name>
              <description>Counter enable</description>
              <bitOffset>0</bitOffset>
              <bitWidth>1</bitWidth>
              <access>read-write</access>
            </field>
            <field>
              <name>CMS</name>
              <description>Center-aligned mode</description>
              <bitRange>[6:5]</bitRange>
            </field>
            <field>
              <name>CKD</name>
              <lsb>8</lsb>
              <msb>9</msb>
              <access>read-only</access>
            </field>
          </fields>
        </register>
        <register>
          <dim>4</dim>
          <dimIncrement>0x4</dimIncrement>
          <name>CCR%s</name>
          <description>capture/compare &amp; register</description>
          <addressOffset>0x34</addressOffset>
          <fields>
            <field>
              <name>CCR</name>
              <bitOffset>0</bitOffset>
              <bitWidth>16</bitWidth>
              <access>writeOnce</access>
            </field>
          </fields>
        </register>
      </registers>
    </peripheral>
    <peripheral derivedFrom="TIM1">
      <name>TIM8</name>
      <baseAddress>0x40013400</baseAddress>
    </peripheral>
    <peripheral>
      <name>GPIOA</name>
      <description>General-purpose I/Os</description>
      <baseAddress>0x48000000</baseAddress>
      <registers>
        <register>
          <name>IDR</name>
          <addressOffset>0x10</addressOffset>
        </register>
      </registers>
    </peripheral>
  </peripherals>
</device>
"""


@pytest.fixture
def demo_svd(tmp_path):
    """Write the demo device description to a file and return its path."""
    path = tmp_path / "demo.svd"
    path.write_text(DEMO_SVD, encoding="utf-8")
    return path


@pytest.fixture
def demo_device():
    """The demo description parsed into a device model."""
    return parse_svd(DEMO_SVD)
