"""Reference text returned verbatim by the cosense_syntax_rule tool."""

COSENSE_SYNTAX_RULES = """\
# Cosense (Scrapbox) syntax rules

## Page structure
- The first line of a page is its title.
- Each following line is a block. Leading spaces or tabs indent a line and
  turn it into a bullet; deeper indentation nests the bullet.

## Links
- [Page title] links to another page in the same project. Links to pages
  that do not exist yet are shown in red and create the page when clicked.
- #tag is a link written as a hashtag. Tags end at whitespace.
- [/project/Page title] links to a page in another project.
- [/project] links to the top of another project.
- [https://example.com] shows a bare external link.
- [https://example.com label] or [label https://example.com] shows an
  external link with a label.

## Text decoration
- [* bold] makes text bold. More asterisks make it larger: [** larger],
  [*** even larger].
- [/ italic] makes text italic.
- [- strikethrough] strikes text through.
- [_ underline] underlines text.
- Decorations combine: [*/ bold italic], [*- bold strikethrough].
- [[bold]] is an alternative bold form.

## Code
- `inline code` marks code inside a line.
- code:filename.ext starts a code block. The block continues for every
  following line indented deeper than the code: line. The extension
  selects syntax highlighting (code:example.py, code:index.js).
- code:python also works with just a language name.

## Tables
- table:name starts a table. Each following indented line is a row, and
  cells are separated by tab characters.

## Quotes and commands
- > quoted text renders a block quote.
- $ command renders a shell command line.
- % command renders a shell command line with a percent prompt.

## Math
- [$ x^2 + y^2 = z^2] renders a TeX formula.

## Media
- [https://example.com/image.png] embeds an image when the URL ends in an
  image extension (.png, .jpg, .jpeg, .gif, .svg, .webp).
- [https://gyazo.com/<id>] embeds a Gyazo image.
- [https://www.youtube.com/watch?v=<id>] embeds a YouTube video.
- [https://twitter.com/<user>/status/<id>] embeds a post.

## Icons
- [name.icon] shows the icon of the page "name".
- [name.icon*3] repeats the icon three times.
- [/project/name.icon] shows an icon from another project.

## Helpfeel
- ? question text starts a Helpfeel line, used to phrase the questions a
  page answers so search can find it.

## Miscellaneous
- [@user] or [user.icon] mentions a user by icon.
- A line that is only a URL or a link is rendered as a card when it points
  to a page.
- Lines starting with a space and a dot are ordinary bullets; numbered
  lists are written literally ("1. ", "2. ").
"""
