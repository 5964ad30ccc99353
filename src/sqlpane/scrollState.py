class ScrollState():
    '''
    Which slice of the result text is visible. The offset never goes below
    zero but is not capped at the content length: scrolling down past the
    end shows an empty pane.
    '''

    def __init__(self, viewportHeight=0):
        self.contentLength = 0
        self.offset = 0
        self.viewportHeight = viewportHeight

    def scrollDown(self):
        self.offset += 1

    def scrollUp(self):
        if self.offset >= 1:
            self.offset -= 1

    def setContentLength(self, contentLength):
        self.contentLength = contentLength

    def visibleSlice(self, lines):
        return lines[self.offset:self.offset + self.viewportHeight]

    def thumbPosition(self, trackLength):
        '''
        Row of the scrollbar thumb within a track of trackLength cells,
        proportional to offset/contentLength. None when there is no track.
        '''
        if trackLength <= 0:
            return None
        if self.contentLength <= 1:
            return 0
        position = self.offset * (trackLength - 1) // (self.contentLength - 1)
        return min(position, trackLength - 1)
