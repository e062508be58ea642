"""Built-in XSLT stylesheet for the HTML report.

A single-page ("noframes") rendering of the checkstyle document: a summary
block, a table of files sorted by name with their violation counts, and one
section per file listing its violations in line order. All CSS is inline,
so the HTML file can be opened on its own.
"""

from __future__ import annotations

DEFAULT_STYLESHEET_NAME = "shellcheck-noframes-sorted.xsl"

DEFAULT_STYLESHEET: str = """<?xml version="1.0" encoding="UTF-8"?>
<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
<xsl:output method="html" indent="yes" encoding="UTF-8"
    doctype-system="about:legacy-compat"/>
<xsl:decimal-format decimal-separator="." grouping-separator=","/>

<xsl:key name="files" match="file" use="@name"/>

<xsl:template match="checkstyle">
<html>
<head>
<meta charset="UTF-8"/>
<title>ShellCheck Audit</title>
<style type="text/css">
body { margin: 20px; font: 14px/1.4 -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; color: #1f2328; }
h1 { font-size: 22px; margin: 0 0 4px 0; }
h2 { font-size: 17px; margin: 28px 0 8px 0; border-bottom: 1px solid #d0d7de; padding-bottom: 4px; }
h3 { font-size: 15px; margin: 22px 0 6px 0; font-family: monospace; }
table { border-collapse: collapse; width: 100%; }
th { text-align: left; background: #f6f8fa; border: 1px solid #d0d7de; padding: 4px 8px; }
td { border: 1px solid #d0d7de; padding: 4px 8px; vertical-align: top; }
td.num { text-align: right; width: 6em; }
a { color: #0969da; text-decoration: none; }
.error { color: #cf222e; font-weight: bold; }
.warning { color: #9a6700; font-weight: bold; }
.info { color: #0969da; }
.style { color: #57606a; }
.muted { color: #57606a; }
</style>
</head>
<body>
<h1>ShellCheck Audit</h1>
<div class="muted">Checkstyle format version <xsl:value-of select="@version"/></div>

<h2>Summary</h2>
<xsl:variable name="fileCount"
    select="count(file[@name and generate-id(.) = generate-id(key('files', @name))])"/>
<xsl:variable name="violationFileCount"
    select="count(file[@name and generate-id(.) = generate-id(key('files', @name)) and key('files', @name)/error])"/>
<xsl:variable name="errorCount" select="count(file/error)"/>
<table>
<tr><th>Files</th><th>Files with violations</th><th>Violations</th></tr>
<tr>
<td class="num"><xsl:value-of select="$fileCount"/></td>
<td class="num"><xsl:value-of select="$violationFileCount"/></td>
<td class="num"><xsl:value-of select="$errorCount"/></td>
</tr>
</table>

<h2>Files</h2>
<table>
<tr><th>Name</th><th>Violations</th></tr>
<xsl:for-each select="file[@name and generate-id(.) = generate-id(key('files', @name))]">
<xsl:sort data-type="number" order="descending" select="count(key('files', @name)/error)"/>
<xsl:sort select="@name"/>
<xsl:variable name="violations" select="count(key('files', @name)/error)"/>
<tr>
<td>
<xsl:choose>
<xsl:when test="$violations &gt; 0">
<a href="#f-{translate(@name, '/\\.:', '____')}"><xsl:value-of select="@name"/></a>
</xsl:when>
<xsl:otherwise><xsl:value-of select="@name"/></xsl:otherwise>
</xsl:choose>
</td>
<td class="num"><xsl:value-of select="$violations"/></td>
</tr>
</xsl:for-each>
</table>

<xsl:for-each select="file[@name and generate-id(.) = generate-id(key('files', @name)) and key('files', @name)/error]">
<xsl:sort select="@name"/>
<h3 id="f-{translate(@name, '/\\.:', '____')}"><xsl:value-of select="@name"/></h3>
<table>
<tr><th>Severity</th><th>Line</th><th>Column</th><th>Message</th><th>Rule</th></tr>
<xsl:for-each select="key('files', @name)/error">
<xsl:sort data-type="number" select="@line"/>
<xsl:sort data-type="number" select="@column"/>
<tr>
<td class="{@severity}"><xsl:value-of select="@severity"/></td>
<td class="num"><xsl:value-of select="@line"/></td>
<td class="num"><xsl:value-of select="@column"/></td>
<td><xsl:value-of select="@message"/></td>
<td class="muted"><xsl:value-of select="@source"/></td>
</tr>
</xsl:for-each>
</table>
</xsl:for-each>

<p class="muted">Generated by shellcheck-runner.</p>
</body>
</html>
</xsl:template>

</xsl:stylesheet>
"""
