"""All directive markers, class names and configuration constants."""

DIRECTIVE_ON = "playscript-on"                          # enable the filter
DIRECTIVE_OFF = "playscript-off"                        # disable the filter
DIRECTIVE_MONOLOGUE_BEGIN = "playscript-monologue-begin"
DIRECTIVE_MONOLOGUE_END = "playscript-monologue-end"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

SPEECH_MARK = ">"                   # separates the speech heading from the body
DIRECTION_OPEN = "("
DIRECTION_CLOSE = ")"

SPEECH_CLASS = "speech"             # <div> wrapping one speech
CHARACTER_CLASS = "character"       # <span> holding the character name
DIRECTION_CLASS = "direction"       # <span>/<em> holding a stage direction
HEADER_CLASS = "header"             # self-link inside the speech heading
MONOLOGUE_CLASS = "monologue"       # <p> of a non-speech paragraph in a monologue
SPEECH_HEADING_LEVEL = 5            # <h5> carries the character name
SOFTBREAK_REPLACEMENT = " "         # replaces line breaks inside a speech body

STYLESHEET = "play.css"
STYLESHEET_JA = "play_ja.css"       # vertical-writing variant for Japanese
DEFAULT_TITLE = "Untitled"
OPTIONS_SUFFIX = ".playscript.json" # sidecar options file next to the input
VERSION = "0.1.0"
VOID_TAGS = {"br", "hr", "img"}     # elements rendered without an end tag
